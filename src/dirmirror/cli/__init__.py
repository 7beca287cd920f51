"""
DirMirror CLI Module.

Provides command-line interface for DirMirror operations.
"""

from dirmirror.cli.main import main, cli

__all__ = ["main", "cli"]
