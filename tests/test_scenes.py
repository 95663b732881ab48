"""Test the scene state machine and localized content.

Tests for omurice.app.scenes and omurice.app.content:
    - Allowed transitions and their targets
    - Strict transition() raises, try_transition() keeps state
    - Only the game scene runs drawing side effects
    - Scene is pushed into the logging context
    - Locale resolution, fallback and toggling

Run:
    pytest tests/test_scenes.py -v
"""

import pytest

from omurice.app.content import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    get_content,
    next_locale,
    resolve_locale,
)
from omurice.app.scenes import TRANSITIONS, Scene, SceneMachine, SceneTransitionError, Transition
from omurice.utils.logging_config import current_context


# ============================================================================
# SCENE MACHINE
# ============================================================================

@pytest.mark.parametrize(
    "start, transition, target",
    [
        (Scene.HOME, Transition.START_GAME, Scene.GAME),
        (Scene.HOME, Transition.OPEN_ABOUT, Scene.ABOUT),
        (Scene.ABOUT, Transition.RETURN_HOME, Scene.HOME),
        (Scene.GAME, Transition.RETURN_HOME, Scene.HOME),
        (Scene.GAME, Transition.RESET, Scene.GAME),
    ],
)
def test_allowed_transitions(start, transition, target):
    machine = SceneMachine(start)
    assert machine.can(transition)
    assert machine.transition(transition) is target
    assert machine.scene is target


def test_transition_table_is_complete():
    assert len(TRANSITIONS) == 5


@pytest.mark.parametrize(
    "start, transition",
    [
        (Scene.HOME, Transition.RESET),
        (Scene.HOME, Transition.RETURN_HOME),
        (Scene.ABOUT, Transition.START_GAME),
        (Scene.ABOUT, Transition.RESET),
        (Scene.GAME, Transition.OPEN_ABOUT),
        (Scene.GAME, Transition.START_GAME),
    ],
)
def test_rejected_transitions(start, transition):
    machine = SceneMachine(start)
    assert not machine.can(transition)
    with pytest.raises(SceneTransitionError):
        machine.transition(transition)
    assert machine.try_transition(transition) is None
    assert machine.scene is start


def test_transition_accepts_string_values():
    machine = SceneMachine()
    assert machine.transition("start_game") is Scene.GAME


def test_runs_drawing_only_in_game():
    machine = SceneMachine()
    assert not machine.runs_drawing
    machine.transition(Transition.OPEN_ABOUT)
    assert not machine.runs_drawing
    machine.transition(Transition.RETURN_HOME)
    machine.transition(Transition.START_GAME)
    assert machine.runs_drawing


def test_scene_in_logging_context():
    machine = SceneMachine()
    assert current_context()["scene"] == "home"
    machine.transition(Transition.START_GAME)
    assert current_context()["scene"] == "game"


# ============================================================================
# CONTENT
# ============================================================================

def test_supported_locales():
    assert SUPPORTED_LOCALES == ("en-US", "ja-JP")
    assert DEFAULT_LOCALE == "en-US"


@pytest.mark.parametrize("locale", [None, "", "fr-FR", "ja"])
def test_unknown_locale_falls_back(locale):
    assert resolve_locale(locale) == "en-US"
    assert get_content(locale) is get_content("en-US")


def test_content_per_locale():
    en = get_content("en-US")
    ja = get_content("ja-JP")
    assert en.title == "Maid Cafe Omurice Simulator"
    assert ja.language_name == "日本語"
    assert en.start_game_button != ja.start_game_button
    assert len(en.about_paragraphs) == len(ja.about_paragraphs) == 3


def test_next_locale_cycles():
    assert next_locale("en-US") == "ja-JP"
    assert next_locale("ja-JP") == "en-US"
    assert next_locale("xx") == "ja-JP"
