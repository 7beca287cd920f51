"""
DirMirror structured logging.

Provides structlog configuration for the application and the append-only
log sink that records the outcome of every entry touched by a mirror run.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import structlog
from structlog.types import EventDict, WrappedLogger

from dirmirror.core.models import LogEntry, Severity

if TYPE_CHECKING:
    from dirmirror.core.config import LoggingConfig


_configured = False


def add_timestamp(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format timestamp to log events."""
    event_dict["timestamp"] = datetime.now().isoformat()
    return event_dict


def add_log_level(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add log level to event dict."""
    event_dict["level"] = method_name.upper()
    return event_dict


def setup_logging(config: LoggingConfig) -> None:
    """Configure structured logging for DirMirror."""
    global _configured

    if _configured:
        return

    handlers: list[logging.Handler] = []

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.level))
        handlers.append(console_handler)

    if config.file_enabled:
        config.log_directory.mkdir(parents=True, exist_ok=True)
        log_file = config.log_directory / f"dirmirror_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8", errors="backslashreplace")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
        format="%(message)s",
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_logger_name,
        add_timestamp,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.json_format:
        structlog.configure(
            processors=shared_processors
            + [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
    else:
        structlog.configure(
            processors=shared_processors
            + [
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name or "dirmirror")


class OperationLogger:
    """Context manager for logging operations with start/end tracking."""

    def __init__(
        self,
        operation: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        **context: Any,
    ):
        self.operation = operation
        self.logger = logger or get_logger()
        self.context = context
        self.start_time: datetime | None = None

    def __enter__(self) -> OperationLogger:
        self.start_time = datetime.now()
        self.logger.debug(
            f"Starting {self.operation}",
            operation=self.operation,
            **self.context,
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        duration = (datetime.now() - self.start_time).total_seconds() if self.start_time else 0

        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation}",
                operation=self.operation,
                duration_seconds=duration,
                error_type=exc_type.__name__,
                error=str(exc_val),
                **self.context,
            )
        else:
            self.logger.debug(
                f"Completed {self.operation}",
                operation=self.operation,
                duration_seconds=duration,
                **self.context,
            )


class LogSink:
    """
    Append-only, ordered record of the outcome of a mirror run.

    Entries are never filtered, reordered or removed. Each one is also
    forwarded to structlog and, when given, to a listener callable so a
    front end can display progress while the run is going.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        listener: Callable[[LogEntry], None] | None = None,
    ) -> None:
        self.logger = logger or get_logger("dirmirror.sink")
        self.listener = listener
        self._entries: list[LogEntry] = []

    def add(self, message: str, severity: Severity = Severity.INFO) -> LogEntry:
        """Append an entry and forward it."""
        entry = LogEntry(message=message, severity=severity)
        self._entries.append(entry)

        if entry.is_error:
            self.logger.error(entry.printable)
        else:
            self.logger.info(entry.printable)

        if self.listener is not None:
            self.listener(entry)
        return entry

    def info(self, message: str) -> LogEntry:
        return self.add(message, Severity.INFO)

    def error(self, message: str) -> LogEntry:
        return self.add(message, Severity.ERROR)

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def errors(self) -> list[LogEntry]:
        return [entry for entry in self._entries if entry.is_error]

    def __len__(self) -> int:
        return len(self._entries)

    def flush(self, path: Path) -> Path:
        """Write all entries to ``path``, one per line, replacing its content."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Undecodable file names keep their original bytes.
        with open(path, "w", encoding="utf-8", errors="surrogateescape") as f:
            for entry in self._entries:
                f.write(entry.format() + "\n")
        return path
