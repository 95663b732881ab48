"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config validation (validators)
    - Canvas sizing arithmetic (sizing)
    - Atomic I/O (fs)
    - Profiling (profiler)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (simulator, app).

Convenience imports:
    from omurice.utils import fs, sizing, validators
    from omurice.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config
from . import profiler
from . import sizing
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'logging_config',
    'profiler',
    'sizing',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
