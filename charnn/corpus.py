"""
corpus.py: fetch and read the training text.

The default corpus is the collected writings of Nietzsche used by the classic
character-level LSTM demos. Text is lowercased to keep the alphabet small.
"""

from __future__ import annotations

import os
import urllib.request
from pathlib import Path
from typing import Optional, Union

from .errors import EmptyCorpusError

NIETZSCHE_URL = "https://s3.amazonaws.com/text-datasets/nietzsche.txt"


def fetch_corpus(url: str = NIETZSCHE_URL, cache_dir: Union[str, Path] = "data") -> Path:
    """Download `url` once into `cache_dir` and return the local path."""
    cache_dir = Path(cache_dir)
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / (os.path.basename(url) or "corpus.txt")
    if not path.exists():
        print(f"Downloading corpus from {url} …")
        part = path.with_name(path.name + ".part")
        try:
            urllib.request.urlretrieve(url, part)
            os.replace(part, path)
        finally:
            # only a complete download ever lands on `path`
            part.unlink(missing_ok=True)
    return path


def read_corpus(path: Union[str, Path]) -> str:
    text = Path(path).read_text(encoding="utf-8").lower()
    if not text:
        raise EmptyCorpusError(f"corpus file {path} is empty")
    return text


def load_corpus(path: Optional[Union[str, Path]] = None,
                url: str = NIETZSCHE_URL,
                cache_dir: Union[str, Path] = "data") -> str:
    if path is None:
        path = fetch_corpus(url, cache_dir)
    return read_corpus(path)
