"""Logging setup for janusspec runs.

Console output goes through Rich on stderr so that spec verdicts on stdout
stay machine-readable. An optional flight recorder keeps a ring of DEBUG
records in memory and writes it out when something goes wrong, most often a
spec that timed out or raised.

Every record emitted while a spec executes is tagged with that spec's
description (`record.spec`), so a flushed flight-recorder file shows which
spec was running for each line.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from janusspec.config import ASYNC_TIMEOUT_ENV

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "janusspec"
NO_SPEC = "-"

_running_spec: ContextVar[str] = ContextVar("janusspec_running_spec", default=NO_SPEC)

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


@contextmanager
def running_spec(description: str) -> Iterator[None]:
    """Tag log records emitted inside the block with `description`."""
    token = _running_spec.set(description)
    try:
        yield
    finally:
        _running_spec.reset(token)


def current_spec() -> str:
    """Description of the spec executing in this context, or ``"-"``."""
    return _running_spec.get()


class SpecContextFilter(logging.Filter):
    """Stamp records with the description of the spec that produced them.

    Must sit on the handler that first sees the record: a buffering handler
    flushes later, outside the spec's context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "spec"):
            record.spec = current_spec()
        return True


class ThirdPartyPrefixFilter(logging.Filter):
    """Prefix records from outside janusspec with their top-level package.

    `record.prefix` becomes e.g. "[asyncio]" for library records and stays
    empty for the engine's own loggers. Nothing is dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def console_level(verbose_count: int = 0, quiet_count: int = 0) -> int:
    """WARNING, moved one level per -v (down) or -q (up), clamped to DEBUG..CRITICAL."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    In debug mode everything down to DEBUG is shown with timestamps, logger
    names, the running spec and source links. Otherwise only the message is
    shown, behind a prefix for third-party records.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.addFilter(SpecContextFilter())
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s [%(spec)s]: %(message)s")
        )
    else:
        handler.addFilter(ThirdPartyPrefixFilter())
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the in-memory flight recorder.

    Up to `capacity` records are buffered and written to `path` once a
    record at `flush_level` arrives (a timed-out or crashing spec logs at
    WARNING), or at shutdown when `flush_on_close` is set. The file is only
    created on the first flush.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    target.setLevel(logging.DEBUG)
    target.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s:%(lineno)d [spec=%(spec)s]: %(message)s"
        )
    )
    recorder = MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=target,
        flushOnClose=flush_on_close,
    )
    recorder.addFilter(SpecContextFilter())
    return recorder


@dataclass(frozen=True)
class LoggingSettings:
    """Everything the CLI group collects about logging for one invocation."""

    verbose_count: int = 0
    quiet_count: int = 0
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    flight_recorder_capacity: int = 2000
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def level(self) -> int:
        return console_level(self.verbose_count, self.quiet_count)

    @property
    def records_flights(self) -> bool:
        return self.flight_recorder and self.log_path is not None


def configure_logging(settings: LoggingSettings) -> list[logging.Handler]:
    """Install the console handler (and flight recorder) on the root logger.

    The root logger passes everything; each handler applies its own level.
    Per-logger overrides from `settings.logger_levels` are applied last.

    Returns:
        list[logging.Handler]: The handlers now attached to the root logger.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=settings.level, debug_mode=settings.debug, color=settings.color
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=settings.log_path,
                capacity=settings.flight_recorder_capacity,
                flush_on_close=settings.force_flush,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def _dist_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:  # pragma: no cover
        return "<not installed>"


def log_startup(
    logger: logging.Logger,
    settings: LoggingSettings,
    handlers: list[logging.Handler],
    app_version: str,
) -> None:
    """Log one INFO line about the invocation, then DEBUG environment details."""
    logger.info(
        "janusspec %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.level),
        "ON" if settings.records_flights else "OFF",
    )
    logger.debug("Python %s on %s %s", sys.version.split()[0], platform.system(), platform.release())
    logger.debug("PID %s, CWD %s", os.getpid(), Path.cwd())
    logger.debug(
        "click %s, click-extra %s, rich %s",
        _dist_version("click"),
        _dist_version("click-extra"),
        _dist_version("rich"),
    )
    logger.debug(
        "%s=%s", ASYNC_TIMEOUT_ENV, os.environ.get(ASYNC_TIMEOUT_ENV, "<unset>")
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if settings.records_flights:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            settings.log_path,
            settings.flight_recorder_capacity,
            settings.force_flush,
        )
    logger.debug(
        "Logger levels: %s",
        {name: logging.getLevelName(lvl) for name, lvl in settings.logger_levels.items()}
        or "<none>",
    )
