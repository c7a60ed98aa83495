"""Logging helpers used by the pathkit CLI.

This module configures console logging with Rich and an in-memory "flight
recorder" that buffers log records and writes them to disk on flush. Records
from other libraries get a short bracketed prefix on the console so they stand
out from pathkit's own messages.

The library modules only create loggers (``logging.getLogger(__name__)``);
handlers are attached by the CLI.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

    from pathkit.config import Defaults

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "pathkit"


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix.

    Records whose logger name does not start with the project prefix get
    `record.prefix` set to a token like "[click_extra]"; pathkit records get
    an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler writing to stderr.

    In debug mode the handler logs at DEBUG and shows the source location;
    otherwise third-party records are prefixed with their package name.

    Args:
        level: Minimum level for console output (DEBUG in debug mode).
        debug_mode: Enable debug formatting.
        color: Enable color output.

    Returns:
        RichHandler: Handler suitable for the root logger.
    """

    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = (
        "%(prefix)s %(message)s"
        if not debug_mode
        else "%(asctime)s %(name)s: %(message)s"
    )
    handler.setFormatter(logging.Formatter(fmt=fmt))

    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path, capacity: int = 2000, flush_on_close: bool = False
) -> MemoryHandler:
    """Configure an in-memory flight recorder backed by a file.

    Buffers up to `capacity` records and writes them to `path` as soon as a
    WARNING arrives, or on close if `flush_on_close` is set. The file is
    truncated when the handler is created.

    Args:
        path: Destination file for flushed records.
        capacity: Number of records kept in memory.
        flush_on_close: Flush the buffer when the handler is closed.

    Returns:
        MemoryHandler: A memory-backed handler with a FileHandler target.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=logging.WARNING,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path,
    flight_recorder: bool,
    flight_capacity: int,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
    defaults: Defaults,
) -> None:
    """Log a one-line startup summary and DEBUG diagnostics.

    The diagnostics cover the interpreter, platform, process, working
    directory, active handlers, flight-recorder settings, per-logger
    overrides and the effective file-operation defaults.

    Args:
        logger: Logger used to emit startup messages.
        app_version: Application version string to display.
        level: Effective console logging level.
        handlers: Handlers attached to the root logger.
        log_path: Flight-recorder output file.
        flight_recorder: Whether the flight recorder is enabled.
        flight_capacity: Flight-recorder capacity.
        force_flush_fr: Whether the flight recorder flushes on close.
        logger_levels: Logger names mapped to their configured levels.
        defaults: Process-wide file-operation defaults in effect.
    """

    logger.info(
        "PATHKIT %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    logger.debug(
        "Defaults: encoding=%s, eof_line_break=%s, line_break=%r, filesystem=%s",
        defaults.encoding,
        defaults.eof_line_break,
        defaults.newline,
        type(defaults.filesystem).__name__,
    )
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path,
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
    )
