"""
DirMirror platform layer.

Provides the filesystem primitives the mirror walk is built on.
"""

from dirmirror.platform.file_ops import LocalFileSystem

__all__ = ["LocalFileSystem"]
