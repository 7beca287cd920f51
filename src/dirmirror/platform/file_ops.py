"""
Local filesystem primitives used by the mirror walk.

Listing helpers raise ``OSError`` to their caller. Every mutating primitive
catches ``OSError`` and reports it through an ``OperationResult`` instead.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from dirmirror.core.models import OperationKind, OperationResult


class LocalFileSystem:
    """Filesystem capability backed by ``os`` and ``shutil``."""

    def __init__(self, *, sort_entries: bool = True) -> None:
        self.sort_entries = sort_entries

    def _scan(self, path: Path, *, directories: bool) -> list[Path]:
        with os.scandir(path) as it:
            names = [
                entry.name
                for entry in it
                if (entry.is_dir() if directories else entry.is_file())
            ]
        if self.sort_entries:
            names.sort()
        return [Path(path) / name for name in names]

    def list_files(self, path: Path) -> list[Path]:
        """Return the files directly inside ``path``."""
        return self._scan(path, directories=False)

    def list_directories(self, path: Path) -> list[Path]:
        """Return the subdirectories directly inside ``path``."""
        return self._scan(path, directories=True)

    def is_file(self, path: Path) -> bool:
        return Path(path).is_file()

    def is_directory(self, path: Path) -> bool:
        return Path(path).is_dir()

    def ensure_directory(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def create_directory(self, path: Path) -> OperationResult:
        try:
            self.ensure_directory(path)
        except OSError as exc:
            return OperationResult.err(OperationKind.CREATE_DIRECTORY, path, exc)
        return OperationResult.ok(OperationKind.CREATE_DIRECTORY, path)

    def copy_file(self, source: Path, target: Path) -> OperationResult:
        """Copy ``source`` over ``target``, replacing an existing file."""
        try:
            shutil.copyfile(source, target)
            shutil.copystat(source, target)
        except OSError as exc:
            return OperationResult.err(OperationKind.COPY_FILE, target, exc, source=source)
        return OperationResult.ok(OperationKind.COPY_FILE, target, source=source)

    def delete_file(self, path: Path) -> OperationResult:
        try:
            Path(path).unlink()
        except OSError as exc:
            return OperationResult.err(OperationKind.DELETE_FILE, path, exc)
        return OperationResult.ok(OperationKind.DELETE_FILE, path)

    def delete_tree(self, path: Path) -> OperationResult:
        """Delete a directory and everything below it."""
        try:
            shutil.rmtree(path)
        except OSError as exc:
            return OperationResult.err(OperationKind.DELETE_DIRECTORY, path, exc)
        return OperationResult.ok(OperationKind.DELETE_DIRECTORY, path)
