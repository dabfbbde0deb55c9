"""
================================================================================
Logging Configuration
================================================================================

Loguru setup for the storefront suites and the `StepLogger` handed to every
framework component.

Sinks (all under the log directory, size-capped and rotated):
    - application.log: everything at or above the configured level
    - error.log: ERROR and above
    - exceptions.log: uncaught exceptions (via sys.excepthook)
    - rejections.log: exceptions from asyncio tasks nobody awaited

Usage:
    log = configure_logging("debug", "logs")
    log.step("Sign in", user="testUser1")
    log.action("Clicking element", retries=3)

================================================================================
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger


LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"

ROTATION = "5 MB"
RETENTION = 5

# Records bound with one of these channels go to the dedicated crash logs
EXCEPTION_CHANNEL = "exception"
REJECTION_CHANNEL = "rejection"

_CONTEXT_KEY = "context"
_CHANNEL_KEY = "channel"


def _format_record(record: Dict[str, Any]) -> str:
    """Append bound context as JSON, but only when there is any."""
    extra = {
        k: v for k, v in record["extra"].items()
        if k not in (_CONTEXT_KEY, _CHANNEL_KEY)
    }
    fmt = LOG_FORMAT
    if extra:
        record["extra"][_CONTEXT_KEY] = json.dumps(extra, default=str, ensure_ascii=False)
        fmt += " | {extra[context]}"
    return fmt + "\n{exception}"


def _channel_filter(channel: str):
    def _filter(record: Dict[str, Any]) -> bool:
        return record["extra"].get(_CHANNEL_KEY) == channel
    return _filter


class StepLogger:
    """
    Logger handed to framework components at construction time.

    Wraps a (bound) loguru logger and adds the test-step vocabulary used in
    step logs: `step`, `action` and `assertion`. Keyword arguments become
    structured context on the record.
    """

    def __init__(self, base=None, **context: Any):
        self._logger = (base or logger).bind(**context) if context else (base or logger)

    def bind(self, **context: Any) -> "StepLogger":
        """Return a child logger carrying extra context."""
        return StepLogger(self._logger, **context)

    def step(self, step: str, **details: Any) -> None:
        self._emit("INFO", f"TEST STEP: {step}", details)

    def action(self, action: str, **details: Any) -> None:
        self._emit("DEBUG", f"TEST ACTION: {action}", details)

    def assertion(self, assertion: str, **details: Any) -> None:
        self._emit("INFO", f"TEST ASSERTION: {assertion}", details)

    def debug(self, message: str, **details: Any) -> None:
        self._emit("DEBUG", message, details)

    def info(self, message: str, **details: Any) -> None:
        self._emit("INFO", message, details)

    def warning(self, message: str, **details: Any) -> None:
        self._emit("WARNING", message, details)

    def error(self, message: str, **details: Any) -> None:
        self._emit("ERROR", message, details)

    def exception(self, message: str, **details: Any) -> None:
        """Log at ERROR with the current exception's traceback."""
        target = self._logger.bind(**details) if details else self._logger
        target.opt(depth=1, exception=True).error(message)

    def _emit(self, level: str, message: str, details: Dict[str, Any]) -> None:
        target = self._logger.bind(**details) if details else self._logger
        # depth=2 reports the caller of step()/info()/... rather than this wrapper
        target.opt(depth=2).log(level, message)


def configure_logging(
    level: str = "info",
    log_dir: Union[str, Path] = "logs",
    console: bool = True,
) -> StepLogger:
    """
    Configure loguru sinks and return the session's StepLogger.

    Calling it again replaces every handler, so it is safe to call once per
    process (or per test in unit tests).

    Args:
        level: Minimum level for console and application log
        log_dir: Directory for the log files (created if missing)
        console: Add a colourised stderr sink

    Returns:
        StepLogger bound to the configured loguru logger
    """
    level = level.upper()
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()

    if console:
        logger.add(
            sys.stderr,
            level=level,
            format=_format_record,
            colorize=True,
            backtrace=True,
            diagnose=False,
        )

    logger.add(
        log_path / "application.log",
        level=level,
        format=_format_record,
        rotation=ROTATION,
        retention=RETENTION,
        encoding="utf-8",
    )
    logger.add(
        log_path / "error.log",
        level="ERROR",
        format=_format_record,
        rotation=ROTATION,
        retention=RETENTION,
        encoding="utf-8",
    )
    logger.add(
        log_path / "exceptions.log",
        level="DEBUG",
        format=_format_record,
        filter=_channel_filter(EXCEPTION_CHANNEL),
        rotation=ROTATION,
        retention=RETENTION,
        encoding="utf-8",
    )
    logger.add(
        log_path / "rejections.log",
        level="DEBUG",
        format=_format_record,
        filter=_channel_filter(REJECTION_CHANNEL),
        rotation=ROTATION,
        retention=RETENTION,
        encoding="utf-8",
    )

    sys.excepthook = _log_uncaught_exception

    logger.debug(f"Logger initialized with level: {level}")
    return StepLogger()


def _log_uncaught_exception(exc_type, exc_value, exc_tb) -> None:
    """sys.excepthook replacement routing crashes to exceptions.log."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    logger.bind(**{_CHANNEL_KEY: EXCEPTION_CHANNEL}).opt(
        exception=(exc_type, exc_value, exc_tb)
    ).critical("Uncaught exception")


def install_rejection_handler(loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
    """
    Route unhandled asyncio task errors to rejections.log.

    Args:
        loop: Event loop to patch; defaults to the running loop
    """
    loop = loop or asyncio.get_running_loop()

    def _handler(event_loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exc = context.get("exception")
        bound = logger.bind(**{_CHANNEL_KEY: REJECTION_CHANNEL})
        message = context.get("message", "Unhandled error in event loop")
        if exc is not None:
            bound.opt(exception=exc).error(f"Unhandled rejection: {message}")
        else:
            bound.error(f"Unhandled rejection: {message}")

    loop.set_exception_handler(_handler)


__all__ = [
    "StepLogger",
    "configure_logging",
    "install_rejection_handler",
]
