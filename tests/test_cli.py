from charnn import cli


def test_train_then_sample(tmp_path, capsys):
    corpus = tmp_path / "corpus.txt"
    corpus.write_text("To be or not to be, that is the question. " * 10, encoding="utf-8")
    outdir = tmp_path / "run"

    cli.main(["train", "--corpus", str(corpus), "--maxlen", "6", "--step", "2", "--epochs", "1",
              "--hidden-dim", "8", "--temperatures", "0.2", "1.2", "--gen-chars", "10",
              "--seed", "3", "--outdir", str(outdir), "--cpu"])
    printed = capsys.readouterr().out
    assert "Epoch 001" in printed
    assert "----- temperature: 0.2" in printed
    assert "----- temperature: 1.2" in printed

    cli.main(["sample", str(outdir), "--seed-text", "to be or", "--count", "15", "--seed", "0", "--cpu"])
    out = capsys.readouterr().out.rstrip("\n")
    assert out.startswith("to be or")
    assert len(out) == len("to be or") + 15
