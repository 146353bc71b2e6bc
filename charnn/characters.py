from typing import Iterable

import torch

from .errors import EmptyCorpusError, UnknownCharacterError


class Alphabet:
    """Distinct characters of a corpus, indexed 0..N-1 in code-point order."""

    def __init__(self, characters: Iterable[str]):
        self.characters = list(characters)
        self.num_characters = len(self.characters)
        if self.num_characters == 0:
            raise EmptyCorpusError("alphabet is empty")
        self._stoi = {c: i for i, c in enumerate(self.characters)}
        if len(self._stoi) != self.num_characters:
            raise ValueError("alphabet characters must be distinct")

    def __len__(self) -> int:
        return self.num_characters

    def __contains__(self, ch: str) -> bool:
        return ch in self._stoi

    def index(self, ch: str) -> int:
        try:
            return self._stoi[ch]
        except KeyError:
            raise UnknownCharacterError(f"character {ch!r} is not in the alphabet") from None

    def char(self, i: int) -> str:
        return self.characters[int(i)]

    def indices(self, text: str) -> torch.Tensor:
        return torch.tensor([self.index(c) for c in text], dtype=torch.long)

    def read(self, indices) -> str:
        return ''.join(self.char(i) for i in indices)


def build_alphabet(corpus: str) -> Alphabet:
    if not corpus:
        raise EmptyCorpusError("corpus is empty")
    return Alphabet(sorted(set(corpus)))
