"""Wall-clock timing for the expensive paths.

Only full redraws are timed today: their cost grows with the number of
committed strokes, while commits and presents stay constant per frame.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def _log_elapsed(name: str, seconds: float) -> None:
    logger.debug(f"{name} took {seconds * 1e3:.2f} ms")


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Time the ``with`` body and report ``(name, seconds)`` to ``sink``.

    The sink runs even when the body raises. Without a sink the timing is
    logged at DEBUG on ``omurice.utils.profiler``.

    Examples
    --------
    >>> with timer("full_redraw", sink=lambda n, s: print(n, s)):
    ...     compositor.full_redraw(drawing)
    """
    report = sink if sink is not None else _log_elapsed
    began = time.perf_counter()
    try:
        yield
    finally:
        report(name, time.perf_counter() - began)
