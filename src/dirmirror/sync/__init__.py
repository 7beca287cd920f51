"""
DirMirror sync module.

Provides one-way mirroring with copy and prune phases.
"""

from dirmirror.sync.manager import MirrorManager, synchronize

__all__ = ["MirrorManager", "synchronize"]
