"""File helpers for exports, preferences and YAML configs.

Every write is staged next to its target and moved into place with
``Path.replace`` once the data is complete, so readers never see a
half-written PNG or preference file.

Used by:
    - ExportSink: omurice-<time>.png snapshots of the visible canvas
    - LocalePreferenceStore: ~/.omurice/preferences.yaml
    - validators: omurice.v1.yaml config loading

Usage:
    from omurice.utils import fs
    fs.atomic_save_image(surface.to_image(), export_dir / "omurice-12_00_00.png")
    fs.atomic_yaml_dump({"locale": "ja-JP"}, prefs_path)
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import numpy as np
import yaml
from PIL import Image

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """mkdir -p; returns the directory."""
    directory = Path(p)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@contextmanager
def _staged(target: Path, staging_name: str) -> Iterator[Path]:
    """Yield a sibling staging path; move it onto ``target`` on success.

    On any failure the staging file is removed and a RuntimeError naming
    ``target`` is raised.
    """
    ensure_dir(target.parent)
    staging = target.parent / staging_name
    try:
        yield staging
        staging.replace(target)
    except Exception as e:
        staging.unlink(missing_ok=True)
        raise RuntimeError(f"Could not replace {target} atomically: {e}") from e


def atomic_write_bytes(path: PathLike, data: bytes, tmp_suffix: str = ".tmp") -> None:
    """Write ``data`` to ``path`` through a fsynced ``<name><tmp_suffix>`` file.

    Raises
    ------
    RuntimeError
        If writing or the final rename fails
    """
    target = Path(path)
    with _staged(target, target.name + tmp_suffix) as staging:
        with open(staging, 'wb') as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())


def atomic_save_image(
    img: np.ndarray,
    path: PathLike,
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Encode a raster with Pillow and move it onto ``path``.

    Parameters
    ----------
    img : np.ndarray
        RGB ``(H, W, 3)`` or grayscale ``(H, W)``/``(H, W, 1)`` raster.
        Anything that is not uint8 is clipped to [0, 255] first.
    path : PathLike
        Destination; its extension picks the encoder.
    pil_kwargs : Optional[Dict[str, Any]]
        Passed through to ``Image.save``.
    """
    target = Path(path)
    raster = np.asarray(img)
    if raster.dtype != np.uint8:
        raster = np.clip(raster, 0, 255).astype(np.uint8)
    if raster.ndim == 3 and raster.shape[-1] == 1:
        raster = raster[..., 0]
    encoded = Image.fromarray(np.ascontiguousarray(raster))

    # staging name keeps the real extension last for Pillow's format lookup
    with _staged(target, f"{target.stem}.tmp{target.suffix}") as staging:
        encoded.save(staging, **(pil_kwargs or {}))


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """Dump ``obj`` with ``yaml.safe_dump`` (keys in insertion order, UTF-8)."""
    text = yaml.safe_dump(obj, sort_keys=False, allow_unicode=True, default_flow_style=False)
    atomic_write_bytes(path, text.encode('utf-8'))


def load_yaml(path: PathLike) -> Any:
    """``yaml.safe_load`` a file.

    Raises FileNotFoundError when the file is absent and yaml.YAMLError
    (with the path prepended) when it does not parse.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"No YAML file at {source} (not found)")
    text = source.read_text(encoding='utf-8')
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"{source}: {e}") from e
