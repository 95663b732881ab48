"""Input adapter: pygame mouse and touch events → pointer events.

Two input families are folded into three logical events in display pixels:

    MOUSEBUTTONDOWN (button 1) / FINGERDOWN   → PointerEvent(DOWN, x, y)
    MOUSEMOTION / FINGERMOTION                → PointerEvent(MOVE, x, y)
    MOUSEBUTTONUP (button 1) / FINGERUP       → PointerEvent(UP, x, y)

Finger coordinates arrive normalized to the window and are scaled by the
window size. Only the first finger down is tracked until it lifts. SDL also
synthesizes mouse events from touches (``event.touch`` is set); those are
dropped so one touch gives one stroke.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

logger = logging.getLogger(__name__)

_PRIMARY_BUTTON = 1


class PointerKind(str, enum.Enum):
    DOWN = "pointer_down"
    MOVE = "pointer_move"
    UP = "pointer_up"


@dataclass(frozen=True)
class PointerEvent:
    """Device-independent pointer event in display pixels."""

    kind: PointerKind
    x: float
    y: float


_MOUSE_KINDS = {
    pygame.MOUSEBUTTONDOWN: PointerKind.DOWN,
    pygame.MOUSEMOTION: PointerKind.MOVE,
    pygame.MOUSEBUTTONUP: PointerKind.UP,
}

_FINGER_KINDS = {
    pygame.FINGERDOWN: PointerKind.DOWN,
    pygame.FINGERMOTION: PointerKind.MOVE,
    pygame.FINGERUP: PointerKind.UP,
}


class InputAdapter:
    """Stateful translator (remembers which finger owns the stroke)."""

    def __init__(self) -> None:
        self._finger: Optional[int] = None

    def translate(
        self,
        event: pygame.event.Event,
        window_size: Tuple[int, int],
    ) -> Optional[PointerEvent]:
        """Translate one pygame event; None if it is not a pointer event."""
        if event.type in _MOUSE_KINDS:
            return self._from_mouse(event, _MOUSE_KINDS[event.type])
        if event.type in _FINGER_KINDS:
            return self._from_finger(event, _FINGER_KINDS[event.type], window_size)
        return None

    def _from_mouse(self, event: pygame.event.Event, kind: PointerKind) -> Optional[PointerEvent]:
        if getattr(event, "touch", False):
            return None
        if kind is not PointerKind.MOVE and getattr(event, "button", _PRIMARY_BUTTON) != _PRIMARY_BUTTON:
            return None
        x, y = event.pos
        return PointerEvent(kind, float(x), float(y))

    def _from_finger(
        self,
        event: pygame.event.Event,
        kind: PointerKind,
        window_size: Tuple[int, int],
    ) -> Optional[PointerEvent]:
        finger = getattr(event, "finger_id", 0)
        if kind is PointerKind.DOWN:
            if self._finger is not None:
                return None
            self._finger = finger
        elif finger != self._finger:
            return None
        elif kind is PointerKind.UP:
            self._finger = None

        width, height = window_size
        return PointerEvent(kind, float(event.x) * width, float(event.y) * height)
