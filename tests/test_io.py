from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile

from adaptivecoloc.io import read_image_2d, write_map


def test_write_and_read_tiff_map(tmp_path: Path):
    arr = np.arange(12, dtype=np.float32).reshape(3, 4)
    out = write_map(tmp_path / "maps" / "tau.tif", arr)
    assert out.exists()
    back = read_image_2d(out)
    assert back.dtype == np.float32
    assert np.array_equal(back, arr)


def test_boolean_maps_written_as_uint8(tmp_path: Path):
    out = write_map(tmp_path / "frozen.npy", np.array([[True, False]]))
    back = np.load(out)
    assert back.dtype == np.uint8
    assert back.tolist() == [[1, 0]]


def test_channel_selection_is_one_based(tmp_path: Path):
    stack = np.stack([np.zeros((4, 5)), np.ones((4, 5))]).astype(np.uint16)
    path = tmp_path / "stack.tif"
    tifffile.imwrite(str(path), stack)
    assert np.all(read_image_2d(path, channel=2) == 1)
    with pytest.raises(ValueError, match="requested channel 3"):
        read_image_2d(path, channel=3)


def test_missing_and_unsupported_inputs(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_image_2d(tmp_path / "missing.npy")
    bad = tmp_path / "image.png"
    bad.write_bytes(b"")
    with pytest.raises(ValueError, match="Unsupported image format"):
        read_image_2d(bad)
    with pytest.raises(ValueError, match="Unsupported output format"):
        write_map(tmp_path / "out.png", np.zeros((2, 2)))


def test_four_dimensional_input_rejected(tmp_path: Path):
    path = tmp_path / "vol.npy"
    np.save(path, np.zeros((2, 2, 3, 3)))
    with pytest.raises(ValueError, match="expected"):
        read_image_2d(path)
