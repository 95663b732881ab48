"""Test atomic filesystem operations.

Tests for omurice.utils.fs:
    - ensure_dir creates parents and is idempotent
    - atomic_write_bytes leaves no tmp file behind
    - atomic_save_image writes a PNG readable by PIL with the same pixels
    - YAML roundtrip preserves structure and non-ASCII text
    - load_yaml raises FileNotFoundError for missing files

Run:
    pytest tests/test_fs.py -v
"""

import numpy as np
import pytest
import yaml
from PIL import Image

from omurice.utils import fs


def test_ensure_dir_creates_directory(tmp_path):
    new_dir = tmp_path / "new" / "nested" / "dir"
    assert fs.ensure_dir(new_dir) == new_dir
    assert new_dir.is_dir()


def test_ensure_dir_idempotent(tmp_path):
    new_dir = tmp_path / "test_dir"
    fs.ensure_dir(new_dir)
    fs.ensure_dir(new_dir)
    assert new_dir.is_dir()


def test_atomic_write_bytes(tmp_path):
    path = tmp_path / "sub" / "data.bin"
    fs.atomic_write_bytes(path, b"ketchup")
    assert path.read_bytes() == b"ketchup"
    assert not list(tmp_path.glob("**/*.tmp"))


def test_atomic_write_bytes_failure_is_runtime_error(tmp_path):
    target = tmp_path / "occupied"
    target.mkdir()
    # Replacing a directory with a file fails on every platform
    with pytest.raises(RuntimeError, match="atomically"):
        fs.atomic_write_bytes(target, b"x")
    assert not (tmp_path / "occupied.tmp").exists()


def test_atomic_save_image_roundtrip(tmp_path):
    rng = np.random.RandomState(0)
    img = rng.randint(0, 256, size=(24, 32, 3)).astype(np.uint8)
    path = tmp_path / "exports" / "omurice-12_00_00.png"

    fs.atomic_save_image(img, path)

    assert path.exists()
    loaded = np.asarray(Image.open(path).convert("RGB"))
    np.testing.assert_array_equal(loaded, img)
    assert not list(path.parent.glob("*.tmp.png"))


def test_atomic_save_image_clips_float(tmp_path):
    img = np.full((4, 4, 3), 300.0)
    path = tmp_path / "clipped.png"
    fs.atomic_save_image(img, path)
    loaded = np.asarray(Image.open(path).convert("RGB"))
    assert loaded.max() == 255


def test_atomic_save_image_overwrites(tmp_path):
    path = tmp_path / "test.png"
    fs.atomic_save_image(np.zeros((8, 8, 3), dtype=np.uint8), path)
    fs.atomic_save_image(np.full((8, 8, 3), 255, dtype=np.uint8), path)
    assert np.asarray(Image.open(path).convert("RGB")).min() == 255


def test_atomic_yaml_roundtrip(tmp_path):
    data = {"locale": "ja-JP", "nested": {"title": "オムライス"}, "list": [1, 2, 3]}
    path = tmp_path / "prefs.yaml"
    fs.atomic_yaml_dump(data, path)

    assert fs.load_yaml(path) == data
    text = path.read_text(encoding="utf-8")
    assert "オムライス" in text
    # insertion order kept
    assert text.index("locale") < text.index("nested")


def test_load_yaml_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "missing.yaml")


def test_load_yaml_invalid(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        fs.load_yaml(path)
