from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import json, torch
from .characters import Alphabet
from .errors import InvalidWindowParamsError
from .model import Architecture
from .sampler import generate

_TINY = torch.finfo(torch.float64).tiny


@torch.no_grad()
def predict_probs(model: torch.nn.Module, x: torch.Tensor, device: torch.device) -> torch.Tensor:
    """Next-char distribution for a [1, L, V] one-hot batch, as float64 on CPU."""
    model.eval()
    logits = model(x.to(device, dtype=torch.float32))[0].double().cpu()
    p = torch.softmax(logits, dim=-1).clamp_min(_TINY)   # reweight() takes log(p)
    return p / p.sum()


@dataclass
class TextGenerator:
    model: torch.nn.Module
    alphabet: Alphabet
    maxlen: int
    device: torch.device
    outdir: Optional[Path] = None

    def predict(self, x: torch.Tensor) -> torch.Tensor:
        return predict_probs(self.model, x, self.device)

    def sample(self, seed: str, temperature: float = 1.0, count: int = 400,
               generator: Optional[torch.Generator] = None) -> str:
        seed = seed.lower()
        if len(seed) < self.maxlen:
            raise InvalidWindowParamsError(f"seed needs at least {self.maxlen} characters, got {len(seed)}")
        head, window = seed[:-self.maxlen], seed[-self.maxlen:]
        return head + generate(self.predict, window, self.alphabet, self.maxlen,
                               temperature, count, generator=generator)

    @classmethod
    def from_artifacts(cls, path: Union[str, Path], device: Optional[torch.device] = None) -> "TextGenerator":
        path = Path(path); device = device or torch.device("cuda" if torch.cuda.is_available() else "cpu")
        vocab = json.loads((path / "vocab.json").read_text(encoding="utf-8"))
        alphabet = Alphabet(vocab["characters"])
        cfg = json.loads((path / "config.json").read_text(encoding="utf-8"))
        model = Architecture(alphabet.num_characters, hidden_dim=int(cfg["hidden_dim"])).to(device)
        model.load_state_dict(torch.load(path / "model.pth", map_location=device))
        return cls(model=model, alphabet=alphabet, maxlen=int(cfg["maxlen"]), device=device, outdir=path)
