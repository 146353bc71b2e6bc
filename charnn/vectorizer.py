"""
Turns a corpus into one-hot training tensors.

Windows of `maxlen` characters are taken every `step` characters, each paired
with the character that follows it:

    x: [N, maxlen, V]   one-hot per character per position
    y: [N, V]           one-hot next character
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

import torch

from .characters import Alphabet, build_alphabet
from .errors import EmptyCorpusError, InvalidWindowParamsError


class Windows:
    """Lazy, restartable sequence of (window_text, target_char) pairs."""

    def __init__(self, corpus: str, maxlen: int, step: int):
        if not corpus:
            raise EmptyCorpusError("corpus is empty")
        if maxlen <= 0 or step <= 0:
            raise InvalidWindowParamsError(f"maxlen and step must be positive (got {maxlen}, {step})")
        if maxlen >= len(corpus):
            raise InvalidWindowParamsError(
                f"maxlen {maxlen} leaves no target in a corpus of {len(corpus)} characters"
            )
        self.corpus = corpus
        self.maxlen = maxlen
        self.step = step

    def __len__(self) -> int:
        return (len(self.corpus) - self.maxlen - 1) // self.step + 1

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        for start in range(0, len(self.corpus) - self.maxlen, self.step):
            end = start + self.maxlen
            yield self.corpus[start:end], self.corpus[end]


def extract_windows(corpus: str, maxlen: int, step: int) -> Windows:
    return Windows(corpus, maxlen, step)


def _one_hot(idx: torch.Tensor, num_characters: int) -> torch.Tensor:
    out = torch.zeros(*idx.shape, num_characters, dtype=torch.bool)
    return out.scatter_(-1, idx.unsqueeze(-1), True)


def encode(windows: Iterable[Tuple[str, str]], alphabet: Alphabet) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    One-hot encode windows as bool tensors; cast to float per batch when training.
    """
    pairs = list(windows)
    if not pairs:
        raise InvalidWindowParamsError("no windows to encode")
    maxlen = len(pairs[0][0])
    if any(len(w) != maxlen for w, _ in pairs):
        raise InvalidWindowParamsError("windows must all have the same length")

    # Indices first, so an unknown character fails before the one-hot tensors exist.
    x_idx = torch.empty((len(pairs), maxlen), dtype=torch.long)
    y_idx = torch.empty(len(pairs), dtype=torch.long)
    for i, (w, t) in enumerate(pairs):
        x_idx[i] = alphabet.indices(w)
        y_idx[i] = alphabet.index(t)

    V = alphabet.num_characters
    return _one_hot(x_idx, V), _one_hot(y_idx, V)   # [N, L, V], [N, V]


def encode_text(text: str, alphabet: Alphabet) -> torch.Tensor:
    """One-hot encode a single sequence as a batch of one: [1, len(text), V]."""
    return _one_hot(alphabet.indices(text), alphabet.num_characters).unsqueeze(0)


def decode_row(row: torch.Tensor, alphabet: Alphabet) -> str:
    return alphabet.char(int(torch.argmax(row.float())))


def vectorize(corpus: str, maxlen: int, step: int,
              alphabet: Optional[Alphabet] = None) -> Tuple[Alphabet, torch.Tensor, torch.Tensor]:
    if alphabet is None:
        alphabet = build_alphabet(corpus)
    x, y = encode(extract_windows(corpus, maxlen, step), alphabet)
    return alphabet, x, y
