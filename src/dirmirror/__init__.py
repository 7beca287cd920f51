"""
DirMirror - One-way directory mirroring.

Makes a destination directory an exact copy of a source directory: new and
changed files are copied, missing subdirectories are created and entries
absent from the source are deleted. Every step is recorded in a run log.
"""

__version__ = "1.0.0"
__author__ = "DirMirror Team"

from dirmirror.core.config import DirMirrorConfig
from dirmirror.sync.manager import MirrorManager, synchronize

__all__ = ["DirMirrorConfig", "MirrorManager", "synchronize", "__version__"]
