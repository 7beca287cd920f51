"""
DirMirror sync manager.

Implements a one-way mirror: copy the source tree over the destination,
then prune destination entries that have no counterpart in the source.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

import structlog

from dirmirror.core.config import MirrorConfig
from dirmirror.core.logging import LogSink, OperationLogger, get_logger
from dirmirror.core.models import LogEntry, OperationResult
from dirmirror.platform.file_ops import LocalFileSystem


@dataclass
class _Frame:
    """One directory level of an explicit-stack tree walk."""

    source: Path
    target: Path
    pending: Iterator[Path]
    copy_files: bool = True


class MirrorManager:
    """Makes a destination directory an exact mirror of a source directory."""

    def __init__(
        self,
        config: MirrorConfig | None = None,
        filesystem: LocalFileSystem | None = None,
        listener: Callable[[LogEntry], None] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.config = config or MirrorConfig()
        self.logger = logger or get_logger(__name__)
        self.fs = filesystem or LocalFileSystem(sort_entries=self.config.sort_entries)
        self.listener = listener

    def synchronize(
        self,
        source: Path,
        destination: Path,
        log_file: Path | None = None,
    ) -> None:
        """
        Mirror ``source`` into ``destination`` and write the run log.

        Per-entry failures are logged and skipped. A failure to list a
        directory aborts the run; the entries collected up to that point are
        still written to the log file before the error propagates.
        """
        source = Path(source)
        destination = Path(destination)
        log_file = Path(log_file) if log_file else self.config.default_log_file
        sink = LogSink(listener=self.listener)

        self.logger.info(
            "Mirror started",
            source=str(source),
            destination=str(destination),
        )
        try:
            self._run(source, destination, sink)
        except Exception:
            try:
                sink.flush(log_file)
            except OSError as exc:
                self.logger.error("Log file not written", log_file=str(log_file), error=str(exc))
            raise

        sink.flush(log_file)
        self.logger.info(
            "Mirror finished",
            entries=len(sink),
            errors=len(sink.errors),
            log_file=str(log_file),
        )

    def _run(self, source: Path, destination: Path, sink: LogSink) -> None:
        self.fs.ensure_directory(destination)

        with OperationLogger("copy", self.logger, source=str(source)):
            self._copy_files(source, destination, sink)
            self._walk_copy(source, destination, sink, copy_root_files=False)

        with OperationLogger("prune", self.logger, destination=str(destination)):
            self.prune_files(destination, source, sink)
            self.prune_directories(destination, source, sink)

    def copy_tree(self, source_dir: Path, dest_dir: Path, sink: LogSink) -> None:
        """
        Copy every subdirectory and file of ``source_dir`` into ``dest_dir``.

        Each subdirectory is created and fully processed before its next
        sibling; the files of a level are copied after all of its
        subdirectories.
        """
        self._walk_copy(Path(source_dir), Path(dest_dir), sink, copy_root_files=True)

    def prune_files(self, dest_dir: Path, source_dir: Path, sink: LogSink) -> None:
        """Delete files directly inside ``dest_dir`` that ``source_dir`` lacks."""
        dest_dir = Path(dest_dir)
        source_dir = Path(source_dir)
        for path in self.fs.list_files(dest_dir):
            if self.fs.is_file(source_dir / path.name):
                continue
            result = self.fs.delete_file(path)
            if result.success:
                sink.info(f"{path.name} deleted from {path}")
            else:
                self._failed(sink, result, f"Error deleting file {path}: {result.error}")

    def prune_directories(self, dest_dir: Path, source_dir: Path, sink: LogSink) -> None:
        """
        Delete subdirectories of ``dest_dir`` missing from ``source_dir``.

        Directories present on both sides are descended into. Files below the
        top level are only pruned when ``recursive_file_prune`` is enabled.
        """
        dest_dir = Path(dest_dir)
        source_dir = Path(source_dir)
        stack = [_Frame(source_dir, dest_dir, iter(self.fs.list_directories(dest_dir)))]

        while stack:
            frame = stack[-1]
            subdir = next(frame.pending, None)
            if subdir is None:
                stack.pop()
                continue

            counterpart = frame.source / subdir.name
            if not self.fs.is_directory(counterpart):
                result = self.fs.delete_tree(subdir)
                if result.success:
                    sink.info(f"Directory: {subdir.name} deleted from: {subdir}")
                else:
                    self._failed(
                        sink, result, f"Error deleting directory {subdir}: {result.error}"
                    )
                continue

            if self.config.recursive_file_prune:
                self.prune_files(subdir, counterpart, sink)
            stack.append(
                _Frame(counterpart, subdir, iter(self.fs.list_directories(subdir)))
            )

    def _walk_copy(
        self,
        source_dir: Path,
        dest_dir: Path,
        sink: LogSink,
        *,
        copy_root_files: bool,
    ) -> None:
        stack = [
            _Frame(
                source_dir,
                dest_dir,
                iter(self.fs.list_directories(source_dir)),
                copy_files=copy_root_files,
            )
        ]

        while stack:
            frame = stack[-1]
            subdir = next(frame.pending, None)
            if subdir is None:
                stack.pop()
                if frame.copy_files:
                    self._copy_files(frame.source, frame.target, sink)
                continue

            target = frame.target / subdir.name
            result = self.fs.create_directory(target)
            if not result.success:
                # Nothing can be copied below a directory that does not exist.
                self._failed(
                    sink, result, f"Error creating directory {target}: {result.error}"
                )
                continue

            sink.info(f"{subdir.name} copied to {target}")
            stack.append(_Frame(subdir, target, iter(self.fs.list_directories(subdir))))

    def _copy_files(self, source_dir: Path, dest_dir: Path, sink: LogSink) -> None:
        for path in self.fs.list_files(source_dir):
            target = dest_dir / path.name
            result = self.fs.copy_file(path, target)
            if result.success:
                sink.info(f"{path.name} copied to {target}")
            else:
                self._failed(sink, result, f"Error copying file {path}: {result.error}")

    def _failed(self, sink: LogSink, result: OperationResult, message: str) -> None:
        sink.error(message)
        self.logger.warning("Operation failed", **result.to_dict())


def synchronize(
    source: Path,
    destination: Path,
    log_file: Path,
    config: MirrorConfig | None = None,
) -> None:
    """Mirror ``source`` into ``destination`` and write the log to ``log_file``."""
    MirrorManager(config).synchronize(source, destination, log_file)
