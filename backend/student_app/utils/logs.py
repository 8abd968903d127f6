"""Logging facade that names loggers after the calling class.

`info("saved")` called from a method of `student_app.services.StudentService`
logs through the `student_app.services.StudentService` logger; called from
a plain function it logs through the calling module's logger. Loggers are
resolved once and kept in a process-wide map.
"""

from __future__ import annotations

import inspect
import logging
import threading
import traceback
from typing import Optional

_LOGGERS: dict[str, logging.Logger] = {}
_LOCK = threading.Lock()
_MAX_TRACE_CHARS = 500


def debug(message: object, tag: Optional[str] = None) -> None:
    _emit(logging.DEBUG, message, tag)


def info(message: object, tag: Optional[str] = None) -> None:
    _emit(logging.INFO, message, tag)


def warn(message: object, tag: Optional[str] = None) -> None:
    _emit(logging.WARNING, message, tag)


def error(message: object, tag: Optional[str] = None) -> None:
    _emit(logging.ERROR, message, tag)


def get_logger(name: str) -> logging.Logger:
    """Return the memoized logger for `name`."""
    with _LOCK:
        log = _LOGGERS.get(name)
        if log is None:
            log = logging.getLogger(name)
            _LOGGERS[name] = log
        return log


def format_stack_trace(exc: Optional[BaseException]) -> Optional[str]:
    """Render the traceback frames of `exc`, one per `\\r\\n\\t` line.

    The result is capped at 500 characters; None when `exc` carries no
    traceback.
    """
    if exc is None:
        return None
    parts = []
    for fs in traceback.extract_tb(exc.__traceback__):
        parts.append(f"\r\n\t{fs.filename}:{fs.lineno} in {fs.name}")
    if not parts:
        return None
    return "".join(parts)[:_MAX_TRACE_CHARS]


def _emit(level: int, message: object, tag: Optional[str]) -> None:
    log = get_logger(_caller_name())
    # skip string building when the level is filtered out
    if not log.isEnabledFor(level):
        return
    if tag is not None:
        message = f"【{tag}】{message}"
    log.log(level, message, stacklevel=3)


def _caller_name() -> str:
    # frames: _caller_name <- _emit <- debug/info/warn/error <- caller
    frame = inspect.currentframe()
    try:
        for _ in range(3):
            if frame is None or frame.f_back is None:
                break
            frame = frame.f_back
        if frame is None:
            return "root"
        owner = frame.f_locals.get("self", frame.f_locals.get("cls"))
        if owner is not None:
            klass = owner if isinstance(owner, type) else type(owner)
            return f"{klass.__module__}.{klass.__qualname__}"
        return frame.f_globals.get("__name__", "root")
    finally:
        del frame
