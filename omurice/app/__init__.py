"""Interactive application layer.

Modules:
    - scenes: home / about / game state machine
    - input: pygame mouse + touch → pointer events
    - subscriptions: frame clock, resize notifier, settle timer
    - content: localized text
    - preferences: persisted locale preference
    - export: PNG snapshots of the canvas
    - program: the update loop owning all state
    - window: pygame frontend

pygame is a hard dependency of input and window; its import banner is
silenced here.
"""

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
