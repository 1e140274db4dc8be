from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pandas as pd

from adaptivecoloc import cli


def test_qnorm_subcommand_prints_quantile(capsys):
    assert cli.main(["qnorm", "0.5"]) == 0
    assert capsys.readouterr().out.strip() == "0.0"


def test_qnorm_subcommand_flags_nan(capsys):
    assert cli.main(["qnorm", "1.5"]) == 2
    assert capsys.readouterr().out.strip() == "nan"


def test_run_writes_maps_and_summary(tmp_path: Path):
    rng = np.random.default_rng(0)
    a = rng.normal(size=(6, 6)) + 5.0
    b = a + 0.3 * rng.normal(size=(6, 6))
    np.save(tmp_path / "c1.npy", a)
    np.save(tmp_path / "c2.npy", b)
    outdir = tmp_path / "out"

    rc = cli.run_main(
        [
            "--image1",
            str(tmp_path / "c1.npy"),
            "--image2",
            str(tmp_path / "c2.npy"),
            "--thres1",
            "0",
            "--thres2",
            "0",
            "--seed",
            "3",
            "--outdir",
            str(outdir),
        ]
    )
    assert rc == 0
    for name in ["colocalization", "tau", "sqrt_n", "frozen", "significant"]:
        assert (outdir / f"{name}.npy").exists()
    summary = pd.read_csv(outdir / "summary.csv")
    assert summary.shape[0] == 1
    meta = json.loads((outdir / "metadata.json").read_text(encoding="utf-8"))
    assert meta["seed"] == 3
    assert meta["shape"] == [6, 6]
    assert len(meta["radii"]) == 15
    assert (outdir / "run.log").exists()
    coloc = np.load(outdir / "colocalization.npy")
    assert coloc.shape == (6, 6)
    assert coloc.mean() > 0.0


def test_run_applies_json_config(tmp_path: Path):
    img = np.full((4, 4), 2.0)
    np.save(tmp_path / "c1.npy", img)
    np.save(tmp_path / "c2.npy", img)
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"askt": {"n_rounds": 5, "warmup_round": 2}}), encoding="utf-8")
    outdir = tmp_path / "out"
    rc = cli.run_main(
        [
            "--image1",
            str(tmp_path / "c1.npy"),
            "--image2",
            str(tmp_path / "c2.npy"),
            "--config",
            str(cfg),
            "--outdir",
            str(outdir),
        ]
    )
    assert rc == 0
    meta = json.loads((outdir / "metadata.json").read_text(encoding="utf-8"))
    assert meta["radii"] == [1, 1, 1, 1, 1]
    assert meta["config"]["warmup_round"] == 2


def test_demo_runs_on_small_phantom(tmp_path: Path, capsys):
    rc = cli.demo_main(["--size", "8", "--outdir", str(tmp_path / "demo"), "--format", "tif"])
    assert rc == 0
    assert (tmp_path / "demo" / "colocalization.tif").exists()
    out = capsys.readouterr().out
    assert "mean_output_inside=" in out
