import json

import numpy as np
import pytest

from cli.main import main


def _lines(capsys):
    return [line for line in capsys.readouterr().out.splitlines() if line.startswith("{")]


def test_cli_trains_and_writes_artifacts(image_dataset, tmp_path, capsys):
    root, config = image_dataset
    run_dir = tmp_path / "run"
    main(["--config", str(config), "--dataset", str(root), "--seed", "3", "--run-dir", str(run_dir)])
    result = json.loads(_lines(capsys)[-1])
    assert result["epochs"] == 1
    assert result["processed"] == 2
    for name in ("metrics.jsonl", "metrics.csv", "weights.npz", "evaluation.json", "manifest.json"):
        assert (run_dir / name).exists()
    manifest = json.loads((run_dir / "manifest.json").read_text())
    assert manifest["config"]["category"] == ["cat", "dog"]
    assert manifest["run"]["seed"] == 3


def test_cli_predicts_with_trained_weights(image_dataset, tmp_path, capsys):
    root, config = image_dataset
    sample = root / "cat" / "cat_0.png"
    main(
        [
            "--config", str(config),
            "--dataset", str(root),
            "--epochs", "400",
            "--learning-rate", "0.5",
            "--seed", "0",
            "--run-dir", str(tmp_path / "run"),
            "--no-evaluate",
            "--predict", str(sample),
        ]
    )
    lines = _lines(capsys)
    summary, prediction = json.loads(lines[0]), json.loads(lines[1])
    assert "evaluation" not in summary
    assert prediction == {"sample": str(sample), "categories": ["cat"]}


def test_cli_reports_missing_config(tmp_path):
    with pytest.raises(SystemExit) as info:
        main(["--config", str(tmp_path / "absent.json"), "--dataset", str(tmp_path)])
    assert "Could not find config file" in str(info.value)


def test_cli_weights_resume(image_dataset, tmp_path, capsys):
    root, config = image_dataset
    main(["--config", str(config), "--dataset", str(root), "--seed", "1", "--run-dir", str(tmp_path / "a")])
    main(
        [
            "--config", str(config),
            "--dataset", str(root),
            "--epochs", "0",
            "--run-dir", str(tmp_path / "b"),
            "--weights", str(tmp_path / "a" / "weights.npz"),
        ]
    )
    with np.load(tmp_path / "a" / "weights.npz") as a, np.load(tmp_path / "b" / "weights.npz") as b:
        for key in a.files:
            assert np.array_equal(a[key], b[key])
