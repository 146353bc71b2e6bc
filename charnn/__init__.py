from .characters import Alphabet, build_alphabet
from .errors import (
    CharRNNError, EmptyCorpusError, InvalidWindowParamsError, UnknownCharacterError,
    InvalidTemperatureError, InvalidProbabilityError,
)
from .vectorizer import Windows, extract_windows, encode, encode_text, decode_row, vectorize
from .sampler import reweight, draw_index, generate
from .corpus import NIETZSCHE_URL, load_corpus
from .datasets import WindowDataset
from .model import Architecture
from .trainer import CharTrainer, TrainerConfig
from .runtime import TextGenerator

__all__ = [
    "Alphabet", "build_alphabet",
    "CharRNNError", "EmptyCorpusError", "InvalidWindowParamsError", "UnknownCharacterError",
    "InvalidTemperatureError", "InvalidProbabilityError",
    "Windows", "extract_windows", "encode", "encode_text", "decode_row", "vectorize",
    "reweight", "draw_index", "generate",
    "NIETZSCHE_URL", "load_corpus", "WindowDataset", "Architecture",
    "CharTrainer", "TrainerConfig", "TextGenerator",
    "train", "load",
]
__version__ = "0.1.0"

def train(*,
          corpus_path: str | None = None,
          text: str | None = None,          # in-memory corpus, overrides corpus_path
          maxlen: int = 40,
          step: int = 3,
          epochs: int = 60,
          batch_size: int = 128,
          lr: float = 1e-2,
          hidden_dim: int = 128,
          temperatures: tuple = (0.2, 0.5, 1.0, 1.2),
          gen_chars: int = 400,
          seed: int | None = None,
          outdir: str | None = None,
          use_cpu: bool = False) -> TextGenerator:
    """Train a fresh character-level LSTM and return a TextGenerator runtime."""
    cfg = TrainerConfig(
        corpus_path=corpus_path, maxlen=maxlen, step=step, epochs=epochs,
        batch_size=batch_size, lr=lr, hidden_dim=hidden_dim,
        temperatures=tuple(temperatures), gen_chars=gen_chars, seed=seed,
        outdir=outdir, use_cpu=use_cpu
    )
    trainer = CharTrainer(cfg=cfg, text=text, autostart=True)
    return TextGenerator.from_artifacts(trainer.outdir, device=trainer.device)

def load(path: str) -> TextGenerator:
    """Load a previously trained generator from an artifacts folder."""
    return TextGenerator.from_artifacts(path)
