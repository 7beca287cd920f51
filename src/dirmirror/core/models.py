"""
DirMirror data models.

Defines log entries and the per-operation results returned by the
filesystem primitives.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any


class Severity(Enum):
    """Severity of a log entry."""

    INFO = "INFO"
    ERROR = "ERROR"


class OperationKind(Enum):
    """Kind of filesystem operation performed on a single entry."""

    CREATE_DIRECTORY = auto()
    COPY_FILE = auto()
    DELETE_FILE = auto()
    DELETE_DIRECTORY = auto()


@dataclass(frozen=True)
class LogEntry:
    """A single line of the synchronization log."""

    message: str
    severity: Severity = Severity.INFO

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def printable(self) -> str:
        """Message with undecodable characters escaped, safe for any text stream."""
        return self.message.encode("utf-8", "backslashreplace").decode("utf-8")

    def format(self) -> str:
        """Render the entry as one log file line; line breaks are escaped."""
        message = self.message.replace("\r", "\\r").replace("\n", "\\n")
        return f"[{self.severity.value}] {message}"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one filesystem primitive: either ok or an error with text."""

    kind: OperationKind
    target: Path
    source: Path | None = None
    success: bool = True
    error: str | None = None

    @classmethod
    def ok(
        cls,
        kind: OperationKind,
        target: Path,
        source: Path | None = None,
    ) -> OperationResult:
        return cls(kind=kind, target=target, source=source)

    @classmethod
    def err(
        cls,
        kind: OperationKind,
        target: Path,
        error: BaseException | str,
        source: Path | None = None,
    ) -> OperationResult:
        return cls(
            kind=kind,
            target=target,
            source=source,
            success=False,
            error=str(error),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.name,
            "source": str(self.source) if self.source else None,
            "target": str(self.target),
            "success": self.success,
            "error": self.error,
        }
