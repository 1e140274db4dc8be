"""Image I/O, logging, and output helpers for colocalization runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np
import tifffile

_IMAGE_SUFFIXES = (".npy", ".tif", ".tiff")


def ensure_dir(path: str | Path) -> None:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)


def setup_logger(log_path: Path, logger_name: str) -> logging.Logger:
    ensure_dir(log_path.parent)
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    fh = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    fh.setFormatter(formatter)
    logger.addHandler(fh)
    sh = logging.StreamHandler()
    sh.setFormatter(formatter)
    logger.addHandler(sh)
    return logger


def read_image_2d(path: str | Path, channel: int = 1) -> np.ndarray:
    """Read a single 2D plane from ``.npy`` or TIFF.

    ``(C, Y, X)`` stacks select ``channel`` (1-based). The dtype is preserved.
    """
    input_path = Path(path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input image '{input_path}' not found.")
    suffix = input_path.suffix.lower()
    if suffix not in _IMAGE_SUFFIXES:
        raise ValueError(f"Unsupported image format: {input_path}")

    if suffix == ".npy":
        arr = np.load(input_path, allow_pickle=False)
    else:
        arr = np.asarray(tifffile.imread(str(input_path)))

    if arr.ndim == 2:
        return arr
    if arr.ndim == 3:
        idx = int(channel) - 1
        if 0 <= idx < arr.shape[0]:
            return arr[idx]
        raise ValueError(
            f"Image has {arr.shape[0]} channel(s); requested channel {channel}: {input_path}"
        )
    raise ValueError(
        f"Image has {arr.ndim} dimensions {arr.shape}; expected (Y, X) or (C, Y, X)."
    )


def write_map(path: str | Path, array: np.ndarray) -> Path:
    """Write a 2D map as ``.npy`` or ``.tif`` according to the suffix."""
    out = Path(path)
    suffix = out.suffix.lower()
    if suffix not in _IMAGE_SUFFIXES:
        raise ValueError(f"Unsupported output format: {out}")
    out.parent.mkdir(parents=True, exist_ok=True)
    arr = np.asarray(array)
    if arr.dtype == bool:
        arr = arr.astype(np.uint8)
    if suffix == ".npy":
        np.save(out, arr, allow_pickle=False)
    else:
        tifffile.imwrite(str(out), arr)
    return out
