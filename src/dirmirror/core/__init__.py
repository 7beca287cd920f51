"""
DirMirror Core.

Contains configuration, logging and the data models shared by the
filesystem layer and the sync manager.
"""

from dirmirror.core.config import DirMirrorConfig, LoggingConfig, MirrorConfig
from dirmirror.core.logging import LogSink, get_logger, setup_logging
from dirmirror.core.models import LogEntry, OperationKind, OperationResult, Severity

__all__ = [
    "DirMirrorConfig",
    "LoggingConfig",
    "MirrorConfig",
    "LogSink",
    "get_logger",
    "setup_logging",
    "LogEntry",
    "OperationKind",
    "OperationResult",
    "Severity",
]
