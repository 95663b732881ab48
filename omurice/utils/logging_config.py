"""Unified logging configuration for the launcher, window and tests.

Provides consistent logging for every entrypoint:
    - Console handler (optionally colored) and file handler with rotation
    - JSON line output mode for tooling
    - Contextual fields (app, scene, locale)
    - Warning capture (Python warnings → logging)
    - Uncaught exception logging

Public API:
    setup_logging(**cfg.logging.setup_kwargs(), context={"app": "omurice"})
    get_logger(name)
    push_context(scene="game")
    pop_context(keys=["scene"])
    install_excepthook()

Format examples:
    Human: 2026-10-18T13:45:12.345Z | INFO     | app=omurice scene=game | Full redraw
    JSON: {"t":"2026-10-18T13:45:12.345Z","lvl":"INFO","scene":"game","msg":"..."}

Context uses contextvars, so the asyncio loop and any helper task see the
same fields. Idempotent: repeated setup_logging() calls replace handlers
instead of stacking them.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('omurice_logging_context', default={})

_configured = False

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


class ContextFormatter(logging.Formatter):
    """Formatter that appends the fields set with push_context().

    Parameters
    ----------
    fmt_mode : str
        "human" or "json"
    use_color : bool
        Colorize the level name (only honored on a TTY)
    tz : str
        "UTC" or "local"
    """

    def __init__(
        self,
        fmt_mode: str = "human",
        use_color: bool = True,
        tz: str = "UTC"
    ):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created)

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get({})
        ts = self._timestamp(record)
        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: dict
    ) -> str:
        payload = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage(),
        }
        payload.update(context)
        if record.exc_info:
            payload['exc'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

    def _format_human(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: dict
    ) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        parts = [ts_str, '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
            parts.append('|')
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; None disables file logging
    json : bool
        JSON lines instead of the human format (file handler only)
    color : bool
        ANSI colors in console output
    to_stderr : bool
        Attach a console handler
    rotate : dict, optional
        {"mode": "size", "max_bytes": 5_000_000, "backup_count": 3} or
        {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    tz : str
        "UTC" (default) or "local"
    capture_warnings : bool
        Route Python warnings into logging
    quiet_libs : list[str], optional
        Logger names forced to WARNING (e.g. ["PIL"])
    context : dict, optional
        Initial contextual fields (e.g. {"app": "omurice"})

    Returns
    -------
    list[logging.Handler]
        Handlers attached to the root logger

    Examples
    --------
    >>> setup_logging(log_level="DEBUG", context={"app": "omurice"})
    """
    global _configured

    root = logging.getLogger()
    if _configured:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(getattr(logging, log_level.upper()))

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", color, tz))
        handlers.append(console)
    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, json, tz))

    for handler in handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        logging.captureWarnings(True)
        logging.getLogger('py.warnings').setLevel(logging.WARNING)

    _configured = True
    return handlers


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str
) -> logging.Handler:
    """File handler for ``log_file``; plain, size-rotated or time-rotated."""
    target = Path(log_file)
    target.parent.mkdir(parents=True, exist_ok=True)

    spec = dict(rotate or {})
    mode = spec.pop('mode', 'size') if spec else None
    if mode is None:
        handler: logging.Handler = logging.FileHandler(target, encoding='utf-8')
    elif mode == 'size':
        handler = logging.handlers.RotatingFileHandler(
            target,
            maxBytes=spec.get('max_bytes', 5_000_000),
            backupCount=spec.get('backup_count', 3),
            encoding='utf-8',
        )
    elif mode == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            target,
            when=spec.get('when', 'D'),
            interval=spec.get('interval', 1),
            backupCount=spec.get('backup_count', 7),
            encoding='utf-8',
        )
    else:
        raise ValueError(f"rotation mode must be 'size' or 'time', got {mode!r}")

    fmt_mode = "json" if json_format else "human"
    handler.setFormatter(ContextFormatter(fmt_mode, use_color=False, tz=tz))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically ``__name__``)."""
    return logging.getLogger(name)


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(app="omurice")
    >>> push_context(scene="game")
    >>> logger.info("Stroke committed")  # → "... | app=omurice scene=game | ..."
    """
    _context_var.set({**_context_var.get({}), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove the given contextual fields, or all of them when keys is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get({}))
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def current_context() -> Dict[str, Any]:
    """Return a copy of the active contextual fields."""
    return dict(_context_var.get({}))


def install_excepthook() -> None:
    """Log uncaught exceptions (except Ctrl+C) before the interpreter exits."""
    def log_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = log_exception


def shutdown() -> None:
    """Flush and close all handlers. Call at the end of main()."""
    logging.shutdown()
