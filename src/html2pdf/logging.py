from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator

from rich.console import Console
from rich.logging import RichHandler

from .models import Verbosity

RENDERER_LOGGERS = ("weasyprint", "weasyprint.progress")
PACKAGE_LOGGERS = ("html2pdf",)

LOG_LEVELS: dict[Verbosity, int] = {
    Verbosity.QUIET: logging.CRITICAL + 1,
    Verbosity.NORMAL: logging.WARNING,
    Verbosity.VERBOSE: logging.DEBUG,
}


def level_for(verbosity: Verbosity) -> int:
    return LOG_LEVELS[verbosity]


@contextmanager
def scoped_logging(verbosity: Verbosity, names: Iterable[str] = RENDERER_LOGGERS) -> Iterator[None]:
    """Apply ``verbosity`` to the named loggers for the duration of the block.

    Levels are restored and the console handler detached on exit.
    """

    loggers = [logging.getLogger(name) for name in names]
    previous = [logger.level for logger in loggers]
    level = level_for(verbosity)
    attached: list[tuple[logging.Logger, logging.Handler]] = []
    for logger in loggers:
        logger.setLevel(level)
        if verbosity is not Verbosity.QUIET and "." not in logger.name:
            handler = RichHandler(console=Console(stderr=True), show_path=False, level=level)
            logger.addHandler(handler)
            attached.append((logger, handler))
    try:
        yield
    finally:
        for logger, handler in attached:
            logger.removeHandler(handler)
        for logger, old_level in zip(loggers, previous):
            logger.setLevel(old_level)


@dataclass(slots=True)
class RunLogEntry:
    source: str
    output_path: str
    status: str
    error_code: str | None
    elapsed_ms: int
    fonts: int
    policy: str
    conformance: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RunLogger:
    """Appends one JSON line per conversion to a log file."""

    def __init__(self, log_file: Path) -> None:
        self._log_file = log_file

    def append(self, entry: RunLogEntry) -> None:
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._log_file.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


__all__ = [
    "LOG_LEVELS",
    "PACKAGE_LOGGERS",
    "RENDERER_LOGGERS",
    "RunLogEntry",
    "RunLogger",
    "level_for",
    "scoped_logging",
]
