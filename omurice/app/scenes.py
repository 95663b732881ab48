"""Scene state machine: home / about / game.

Transitions:
    start_game    home  → game   (caller schedules the settle redraw)
    open_about    home  → about
    return_home   about → home, game → home
    reset         game  → game   (caller clears the drawing)

Only the game scene runs the frame clock's drawing side effects.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Optional, Tuple

from omurice.utils.logging_config import push_context

logger = logging.getLogger(__name__)


class Scene(str, enum.Enum):
    HOME = "home"
    ABOUT = "about"
    GAME = "game"


class Transition(str, enum.Enum):
    START_GAME = "start_game"
    OPEN_ABOUT = "open_about"
    RETURN_HOME = "return_home"
    RESET = "reset"


TRANSITIONS: Dict[Tuple[Scene, Transition], Scene] = {
    (Scene.HOME, Transition.START_GAME): Scene.GAME,
    (Scene.HOME, Transition.OPEN_ABOUT): Scene.ABOUT,
    (Scene.ABOUT, Transition.RETURN_HOME): Scene.HOME,
    (Scene.GAME, Transition.RETURN_HOME): Scene.HOME,
    (Scene.GAME, Transition.RESET): Scene.GAME,
}


class SceneTransitionError(Exception):
    """Raised by SceneMachine.transition() for a transition not allowed here."""

    pass


class SceneMachine:
    """Current scene plus the allowed transitions out of it."""

    def __init__(self, initial: Scene = Scene.HOME) -> None:
        self._scene = Scene(initial)
        push_context(scene=self._scene.value)

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def runs_drawing(self) -> bool:
        """True when draw ticks and pointer strokes have effects."""
        return self._scene is Scene.GAME

    def can(self, transition: Transition) -> bool:
        return (self._scene, Transition(transition)) in TRANSITIONS

    def transition(self, transition: Transition) -> Scene:
        """Apply ``transition`` or raise SceneTransitionError."""
        transition = Transition(transition)
        target = TRANSITIONS.get((self._scene, transition))
        if target is None:
            raise SceneTransitionError(
                f"Transition '{transition.value}' not allowed from scene '{self._scene.value}'"
            )
        previous, self._scene = self._scene, target
        push_context(scene=target.value)
        logger.info(f"Scene {previous.value} → {target.value} ({transition.value})")
        return target

    def try_transition(self, transition: Transition) -> Optional[Scene]:
        """Apply ``transition`` if allowed; otherwise log and return None."""
        try:
            return self.transition(transition)
        except SceneTransitionError as e:
            logger.debug(str(e))
            return None
