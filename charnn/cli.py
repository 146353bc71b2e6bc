#!/usr/bin/env python3
"""
Command line entry point: train a character-level LSTM, or sample from one.

Run:
    python3 -m charnn.cli train --epochs 20 --outdir artifacts/run1
    python3 -m charnn.cli sample artifacts/run1 --seed-text "the philosopher is one who ..." --temperature 0.5
"""

from __future__ import annotations
import argparse

import torch

from .corpus import NIETZSCHE_URL
from .runtime import TextGenerator
from .trainer import CharTrainer, TrainerConfig


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Character-level text generation with an LSTM.")
    sub = p.add_subparsers(dest="command", required=True)

    t = sub.add_parser("train", help="Train on a corpus and sample after every epoch.")
    t.add_argument("--corpus", type=str, default=None, help="Local text file (default: download --url)")
    t.add_argument("--url", type=str, default=NIETZSCHE_URL)
    t.add_argument("--maxlen", type=int, default=40)
    t.add_argument("--step", type=int, default=3)
    t.add_argument("--epochs", type=int, default=60)
    t.add_argument("--batch-size", type=int, default=128)
    t.add_argument("--lr", type=float, default=1e-2)
    t.add_argument("--hidden-dim", type=int, default=128)
    t.add_argument("--temperatures", type=float, nargs="+", default=[0.2, 0.5, 1.0, 1.2])
    t.add_argument("--gen-chars", type=int, default=400)
    t.add_argument("--seed", type=int, default=None, help="Training/sampling seed (None=non-deterministic)")
    t.add_argument("--outdir", type=str, default=None)
    t.add_argument("--cpu", action="store_true")

    s = sub.add_parser("sample", help="Generate text from a trained artifacts folder.")
    s.add_argument("artifacts", type=str)
    s.add_argument("--seed-text", type=str, required=True, help="At least maxlen characters")
    s.add_argument("--temperature", type=float, default=0.5)
    s.add_argument("--count", type=int, default=400)
    s.add_argument("--seed", type=int, default=None)
    s.add_argument("--cpu", action="store_true")
    return p.parse_args(argv)


def train(args):
    cfg = TrainerConfig(
        corpus_path=args.corpus,
        url=args.url,
        maxlen=args.maxlen,
        step=args.step,
        epochs=args.epochs,
        batch_size=args.batch_size,
        lr=args.lr,
        hidden_dim=args.hidden_dim,
        temperatures=tuple(args.temperatures),
        gen_chars=args.gen_chars,
        seed=args.seed,
        outdir=args.outdir,
        use_cpu=args.cpu,
    )
    # Training runs during initialization
    trainer = CharTrainer(cfg=cfg, autostart=True)
    print(f"artifacts: {trainer.outdir}")


def sample(args):
    device = torch.device("cpu") if args.cpu else None
    gen = TextGenerator.from_artifacts(args.artifacts, device=device)
    g = None
    if args.seed is not None:
        g = torch.Generator()
        g.manual_seed(args.seed)
    print(gen.sample(args.seed_text, temperature=args.temperature, count=args.count, generator=g))


def main(argv=None):
    args = parse_args(argv)
    if args.command == "train":
        train(args)
    else:
        sample(args)


if __name__ == "__main__":
    main()
