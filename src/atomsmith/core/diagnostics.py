"""Debug trace sinks fed with one line per hook firing."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable


if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console

    from .config import DebugConfig


logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Atom"


def format_debug_entry(source: str, entry_type: str, message: str) -> str:
    """Return the ``<source> | <type>: <message>`` trace line."""
    return f"{source} | {entry_type}: {message}"


@runtime_checkable
class DebugSink(Protocol):
    """Destination for debug trace entries."""

    def write(self, entry_type: str, message: str) -> None: ...


class NullSink:
    """Sink that discards every entry."""

    def write(self, entry_type: str, message: str) -> None:
        return


class FileSink:
    """Append trace entries to a log file, one per line."""

    def __init__(self, path: str | Path, *, source: str = DEFAULT_SOURCE) -> None:
        self.path = Path(path)
        self.source = source

    def write(self, entry_type: str, message: str) -> None:
        entry = format_debug_entry(self.source, entry_type, message)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(entry + "\n")


class StreamSink:
    """Echo trace entries to an output stream through a Rich console."""

    def __init__(self, stream: TextIO | None = None, *, source: str = DEFAULT_SOURCE) -> None:
        self.stream = stream
        self.source = source
        self._console: Console | None = None

    @property
    def console(self) -> Console:
        from rich.console import Console

        target = self.stream if self.stream is not None else sys.stdout
        if self._console is None or self._console.file is not target:
            self._console = Console(
                file=target,
                markup=False,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )
        return self._console

    def write(self, entry_type: str, message: str) -> None:
        self.console.print(format_debug_entry(self.source, entry_type, message))


class LoggingSink:
    """Forward trace entries to the standard logging module."""

    def __init__(
        self,
        *,
        logger_obj: logging.Logger | None = None,
        source: str = DEFAULT_SOURCE,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger_obj or logger
        self.source = source
        self.level = level

    def write(self, entry_type: str, message: str) -> None:
        self._logger.log(self.level, "%s", format_debug_entry(self.source, entry_type, message))


def sink_from_config(config: DebugConfig) -> DebugSink:
    """Build the sink selected by the debug flags.

    Page logging takes precedence over file logging.
    """
    if config.page_logging:
        return StreamSink(source=config.source)
    if config.file_logging:
        return FileSink(config.log_file, source=config.source)
    return NullSink()


__all__ = [
    "DEFAULT_SOURCE",
    "DebugSink",
    "FileSink",
    "LoggingSink",
    "NullSink",
    "StreamSink",
    "format_debug_entry",
    "sink_from_config",
]
