"""Snapshot export of the visible canvas.

Writes ``<directory>/<prefix>-<localized time>.png`` where the localized
time (``%X``) has spaces and separators replaced by underscores, e.g.
``omurice-14_05_33.png``. No surface means no artifact and no error.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from omurice.simulator.surface import RenderSurface
from omurice.utils import fs

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[\s:/\\]+")


class ExportSink:
    """Save the visible raster as a PNG.

    Parameters
    ----------
    directory : str or Path
        Output directory (``~`` is expanded, created on demand)
    prefix : str
        File name prefix
    now : Callable[[], datetime]
        Clock (injectable for tests)
    """

    def __init__(
        self,
        directory: Union[str, Path],
        prefix: str = "omurice",
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.directory = Path(directory).expanduser()
        self.prefix = prefix
        self._now = now

    def filename(self, when: Optional[datetime] = None) -> str:
        when = when or self._now()
        stamp = _UNSAFE.sub("_", when.strftime("%X").strip())
        return f"{self.prefix}-{stamp}.png"

    def export(self, surface: Optional[RenderSurface]) -> Optional[Path]:
        """Write ``surface`` to disk; None if there is nothing to export.

        Raises
        ------
        RuntimeError
            If the image could not be written
        """
        if surface is None or not surface.is_ready:
            logger.debug("Export skipped: no canvas attached")
            return None
        path = self.directory / self.filename()
        fs.atomic_save_image(surface.to_image(), path)
        logger.info(f"Exported {path}")
        return path
