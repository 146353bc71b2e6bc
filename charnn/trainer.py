from __future__ import annotations

import json
import random
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Tuple, List, Dict, Any

import torch
import torch.nn as nn
import torch.utils.data as data

from .characters import build_alphabet
from .corpus import NIETZSCHE_URL, load_corpus
from .datasets import WindowDataset
from .model import Architecture
from .runtime import predict_probs
from .sampler import generate
from .vectorizer import vectorize


@dataclass
class TrainerConfig:
    corpus_path: str | None = None   # local text file (None = download `url`)
    url: str = NIETZSCHE_URL
    maxlen: int = 40                 # window length
    step: int = 3                    # stride between windows
    epochs: int = 60
    batch_size: int = 128
    lr: float = 1e-2
    hidden_dim: int = 128
    temperatures: Tuple[float, ...] = (0.2, 0.5, 1.0, 1.2)
    gen_chars: int = 400             # characters generated per temperature per epoch
    seed: int | None = None          # training + sampling RNG (None = non-deterministic)
    outdir: str | None = None        # default artifacts/YYYYMMDD-HHMMSS
    use_cpu: bool = False            # force CPU
    num_workers: int = 0
    pin_memory: bool = False


class CharTrainer:
    """
    Trains a character-level LSTM and samples from it after every epoch.

    Instantiating this class runs training if autostart=True. Pass `text` to
    train on an in-memory corpus instead of loading one.

    Artifacts:
      - model.pth, model_best.pth
      - vocab.json
      - config.json
      - history.json   (per-epoch loss and samples)
      - README.txt
    """
    def __init__(self, cfg: TrainerConfig = TrainerConfig(), text: str | None = None, autostart: bool = True):
        self.cfg = cfg
        self.device = torch.device("cpu" if cfg.use_cpu or not torch.cuda.is_available() else "cuda")

        self.rng = random.Random(cfg.seed)
        self.sample_gen = torch.Generator()
        if cfg.seed is not None:
            torch.manual_seed(cfg.seed)
            self.sample_gen.manual_seed(cfg.seed)
            if self.device.type == "cuda":
                torch.cuda.manual_seed_all(cfg.seed)
        else:
            self.sample_gen.seed()

        # Data
        self.text = text.lower() if text is not None else load_corpus(cfg.corpus_path, url=cfg.url)
        self.alphabet = build_alphabet(self.text)
        _, self.x, self.y = vectorize(self.text, cfg.maxlen, cfg.step, alphabet=self.alphabet)
        print(f"corpus length: {len(self.text)} | chars: {self.alphabet.num_characters} "
              f"| sequences: {self.x.shape[0]}")

        self.dataset = WindowDataset(self.x, self.y)
        self.loader = data.DataLoader(
            self.dataset, batch_size=cfg.batch_size, shuffle=True,
            num_workers=cfg.num_workers, pin_memory=cfg.pin_memory
        )

        # Model / optimizer / loss (one-hot targets are class probabilities)
        self.model = Architecture(self.alphabet.num_characters, hidden_dim=cfg.hidden_dim).to(self.device)
        self.criterion = nn.CrossEntropyLoss()
        self.opt = torch.optim.RMSprop(self.model.parameters(), lr=cfg.lr)

        ts = datetime.now().strftime("%Y%m%d-%H%M%S")
        self.outdir = Path(cfg.outdir or f"artifacts/{ts}")
        self.outdir.mkdir(parents=True, exist_ok=True)

        self.best_loss = float("inf")
        self.history: List[Dict[str, Any]] = []

        if autostart:
            self.run()

    # -------- public API --------
    def run(self):
        for epoch in range(1, self.cfg.epochs + 1):
            loss = self._train_one()
            print(f"Epoch {epoch:03d} | loss {loss:.4f}")

            samples = self.sample_epoch()
            self.history.append({"epoch": epoch, "loss": loss, "samples": samples})

            if loss < self.best_loss:
                torch.save(self.model.state_dict(), self.outdir / "model_best.pth")
                self.best_loss = loss

        self._finalize()

    def sample_epoch(self) -> Dict[str, str]:
        """Generate `gen_chars` characters at every configured temperature from one random seed."""
        L = self.cfg.maxlen
        start = self.rng.randint(0, len(self.text) - L - 1)
        seed = self.text[start:start + L]
        predict = lambda x: predict_probs(self.model, x, self.device)

        samples = {}
        for temperature in self.cfg.temperatures:
            out = generate(predict, seed, self.alphabet, L, temperature,
                           self.cfg.gen_chars, generator=self.sample_gen)
            samples[str(temperature)] = out
            print(f"----- temperature: {temperature}")
            print(out)
            print()
        return samples

    # -------- internals --------
    def _train_one(self) -> float:
        self.model.train()
        total = 0.0
        count = 0
        for x, y in self.loader:
            x = x.to(self.device, non_blocking=self.cfg.pin_memory).float()
            y = y.to(self.device, non_blocking=self.cfg.pin_memory).float()
            self.opt.zero_grad(set_to_none=True)
            logits = self.model(x)  # [B, V]
            loss = self.criterion(logits, y)
            loss.backward()
            self.opt.step()
            total += loss.item() * y.size(0)
            count += y.size(0)
        return total / max(count, 1)

    def _save_vocab(self):
        (self.outdir / "vocab.json").write_text(
            json.dumps({"characters": self.alphabet.characters}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )

    def _finalize(self):
        torch.save(self.model.state_dict(), self.outdir / "model.pth")
        self._save_vocab()

        (self.outdir / "history.json").write_text(
            json.dumps(self.history, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        (self.outdir / "config.json").write_text(json.dumps(asdict(self.cfg), indent=2), encoding="utf-8")

        (self.outdir / "README.txt").write_text(
            "Artifacts for a character-level LSTM text generator.\n"
            f"- device: {self.device}\n"
            f"- corpus length: {len(self.text)}, alphabet size: {self.alphabet.num_characters}\n"
            f"- see config.json for full TrainerConfig\n"
            f"- see history.json for per-epoch loss and samples\n",
            encoding="utf-8",
        )
