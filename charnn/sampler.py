from __future__ import annotations

from typing import Callable, Optional

import torch

from .characters import Alphabet
from .errors import InvalidProbabilityError, InvalidTemperatureError, InvalidWindowParamsError
from .vectorizer import encode_text

SUM_TOLERANCE = 1e-6

PredictFn = Callable[[torch.Tensor], torch.Tensor]


def _as_probs(probs) -> torch.Tensor:
    p = torch.as_tensor(probs, dtype=torch.float64).detach().cpu()
    if p.dim() != 1 or p.numel() == 0:
        raise InvalidProbabilityError(f"expected a non-empty 1-D probability vector, got shape {tuple(p.shape)}")
    return p


def reweight(probs, temperature: float) -> torch.Tensor:
    """
    Sharpen (temperature < 1) or flatten (temperature > 1) a distribution:
    exp(log(p) / temperature), renormalized to sum to 1.
    """
    if not temperature > 0:
        raise InvalidTemperatureError(f"temperature must be > 0, got {temperature}")
    p = _as_probs(probs)
    if bool((p <= 0).any()) or not bool(torch.isfinite(p).all()):
        raise InvalidProbabilityError("probabilities must be finite and strictly positive")
    if abs(p.sum().item() - 1.0) > SUM_TOLERANCE:
        raise InvalidProbabilityError(f"probabilities sum to {p.sum().item():.8f}, not 1")

    logp = torch.log(p)
    # mode sits at exactly 0, so tiny temperatures send the rest to -inf, never NaN
    w = torch.exp((logp - logp.max()) / temperature)
    return w / w.sum()


def draw_index(adjusted_probs, generator: Optional[torch.Generator] = None) -> int:
    """One multinomial trial: the realized category, not the most likely one."""
    p = _as_probs(adjusted_probs)
    if bool((p < 0).any()) or not bool(torch.isfinite(p).all()) or p.sum().item() <= 0:
        raise InvalidProbabilityError("cannot draw from a negative or all-zero distribution")
    return int(torch.multinomial(p, 1, generator=generator).item())


def generate(model_predict_fn: PredictFn,
             seed_window: str,
             alphabet: Alphabet,
             maxlen: int,
             temperature: float,
             count: int,
             generator: Optional[torch.Generator] = None) -> str:
    """
    Extend `seed_window` by `count` sampled characters.

    Each step feeds the current buffer (exactly `maxlen` chars) to the model,
    samples the next character, then slides the buffer by one.
    """
    if len(seed_window) != maxlen:
        raise InvalidWindowParamsError(f"seed has {len(seed_window)} characters, expected {maxlen}")
    if count < 0:
        raise InvalidWindowParamsError(f"count must be >= 0, got {count}")

    buffer = seed_window
    out = []
    for _ in range(count):
        x = encode_text(buffer, alphabet)            # [1, L, V]
        probs = model_predict_fn(x)
        if len(probs) != alphabet.num_characters:
            raise InvalidProbabilityError(
                f"model returned {len(probs)} probabilities for {alphabet.num_characters} characters"
            )
        nxt = alphabet.char(draw_index(reweight(probs, temperature), generator=generator))
        out.append(nxt)
        buffer = buffer[1:] + nxt
    return seed_window + ''.join(out)
