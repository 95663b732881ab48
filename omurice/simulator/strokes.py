"""Splat, stroke and drawing containers.

Provides:
    - Splat: one ketchup blob (normalized position, base size, pooled extra)
    - Stroke: one pointer-down-to-up gesture, grows only at its tail
    - Drawing: arena of committed (frozen) strokes plus one current stroke

Coordinates are normalized to the canvas's drawable area, [0,1]², so a
drawing survives resizes unchanged; pixels appear only at render time.

Mutation is scoped to the current stroke: committing a stroke freezes its
splat sequence and moves it into the committed arena, after which nothing
touches it again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple


@dataclass
class Splat:
    """A single blob: position in [0,1]², base radius and pooled growth."""

    x: float
    y: float
    base: float
    extra: float = 0.0

    @property
    def size(self) -> float:
        """Rendered size before pixel scaling."""
        return self.base + self.extra


@dataclass
class Stroke:
    """Ordered splats of one gesture.

    ``squeeze_finished`` is the per-stroke absorbing flag: once the simulated
    sauce supply sputters out (or the pointer is released) nothing else is
    appended to this stroke.
    """

    splats: List[Splat] = field(default_factory=list)
    squeeze_finished: bool = False
    frozen: bool = False

    def __len__(self) -> int:
        return len(self.splats)

    def __iter__(self) -> Iterator[Splat]:
        return iter(self.splats)

    @property
    def last(self) -> Optional[Splat]:
        return self.splats[-1] if self.splats else None

    def append(self, splat: Splat) -> None:
        if self.frozen:
            raise RuntimeError("Cannot append to a committed stroke")
        self.splats.append(splat)

    def recent(self, limit: int) -> Sequence[Splat]:
        """Most recent ``limit`` splats, newest first."""
        return self.splats[:-limit - 1:-1]

    def freeze(self) -> Tuple[Splat, ...]:
        """Seal the stroke; its splat sequence becomes an immutable tuple."""
        self.squeeze_finished = True
        self.frozen = True
        self.splats = tuple(self.splats)
        return self.splats


class Drawing:
    """Committed strokes plus the current (active) one.

    The active stroke is the last stroke of the drawing; every earlier stroke
    is committed.
    """

    def __init__(self) -> None:
        self._committed: List[Stroke] = []
        self._current: Optional[Stroke] = None

    def __len__(self) -> int:
        return len(self._committed) + (1 if self._current is not None else 0)

    @property
    def committed(self) -> Tuple[Stroke, ...]:
        return tuple(self._committed)

    @property
    def current(self) -> Optional[Stroke]:
        return self._current

    @property
    def strokes(self) -> List[Stroke]:
        """All strokes in drawing order; the last one is active."""
        if self._current is None:
            return list(self._committed)
        return [*self._committed, self._current]

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def begin_stroke(self) -> Stroke:
        """Push a new empty stroke, committing any unfinished current one."""
        if self._current is not None:
            self.commit_current()
        self._current = Stroke()
        return self._current

    def commit_current(self) -> Optional[Stroke]:
        """Freeze the current stroke and move it into the committed arena."""
        stroke = self._current
        if stroke is None:
            return None
        stroke.freeze()
        self._committed.append(stroke)
        self._current = None
        return stroke

    def clear(self) -> None:
        self._committed.clear()
        self._current = None

    def splat_count(self) -> int:
        return sum(len(s) for s in self.strokes)
