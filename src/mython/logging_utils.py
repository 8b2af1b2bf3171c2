"""Runtime logging helpers."""

from __future__ import annotations

import logging
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

from mython.config.settings import InterpreterSettings

LogProfile = Literal["default", "console"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_LOGURU_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})
_CONFIGURED_PROFILE: LogProfile | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int = record.levelname if record.levelname in _LOGURU_LEVELS else record.levelno
        logger.opt(exception=record.exc_info).patch(_caller_from(record)).log(level, record.getMessage())


def _caller_from(record: logging.LogRecord):
    """Report the stdlib record's origin instead of this handler."""

    def patch(message_record) -> None:
        message_record["name"] = record.name
        message_record["function"] = record.funcName
        message_record["line"] = record.lineno

    return patch


def _build_console_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def parse_log_filter(spec: str) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse a log filter string.

    Format: "level" or "level,module1=level,module2=false"
    Examples:
        - "info" - global INFO level
        - "debug,mython.eval=trace" - global DEBUG, mython.eval at TRACE
        - "info,mython.runtime=false" - global INFO, mython.runtime disabled

    Returns:
        (global_level, module_filter_dict)
    """
    global_level = "info"
    modules: dict[str | None, str | int | bool] = {}

    for part in filter(None, (p.strip() for p in spec.lower().split(","))):
        module, sep, level = part.partition("=")
        if not sep:
            global_level = part
            continue
        level = level.strip()
        modules[module.strip()] = False if level == "false" else level.upper()

    return global_level, modules


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(settings: InterpreterSettings | None = None, *, profile: LogProfile | None = None) -> None:
    """Configure process-level logging once.

    Levels come from ``settings.log_filter`` (env ``MYTHON_LOG_FILTER``).
    Hosts call this; the library itself never does.
    """
    global _CONFIGURED_PROFILE

    if settings is None:
        settings = InterpreterSettings()
    profile = profile or settings.log_profile
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter(settings.log_filter)

    logger.remove()

    if profile == "console":
        logger.add(
            _build_console_handler(),
            level=global_level.upper(),
            format="{message}",
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )
    else:
        logger.add(
            sys.stderr,
            level=global_level.upper(),
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )

    _setup_stdlib_intercept()

    _CONFIGURED_PROFILE = profile


def reset_logging() -> None:
    """Forget the configured profile so the next configure call applies."""
    global _CONFIGURED_PROFILE
    _CONFIGURED_PROFILE = None
