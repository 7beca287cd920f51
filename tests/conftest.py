"""
Pytest configuration and fixtures for DirMirror tests.
"""

import json
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def build_tree(root: Path, layout: dict) -> Path:
    """
    Create files and directories under ``root`` from a nested dict.

    String values become files with that content, dict values become
    directories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        path = root / name
        if isinstance(value, dict):
            build_tree(path, value)
        else:
            path.write_text(value)
    return root


def read_tree(root: Path) -> dict:
    """Inverse of ``build_tree``: snapshot names and file contents."""
    tree: dict = {}
    for path in sorted(root.iterdir()):
        if path.is_dir():
            tree[path.name] = read_tree(path)
        else:
            tree[path.name] = path.read_text()
    return tree


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    return temp_dir / "source"


@pytest.fixture
def dest_dir(temp_dir: Path) -> Path:
    return temp_dir / "dest"


@pytest.fixture
def log_file(temp_dir: Path) -> Path:
    return temp_dir / "logs" / "mirror.log"


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Write a configuration file that keeps all output inside temp_dir."""
    path = temp_dir / "config.json"
    path.write_text(
        json.dumps(
            {
                "logging": {
                    "file_enabled": False,
                    "console_enabled": False,
                    "log_directory": str(temp_dir / "app-logs"),
                },
                "mirror": {
                    "default_log_file": str(temp_dir / "default.log"),
                },
            }
        )
    )
    return path


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


@pytest.fixture
def make_tree():
    return build_tree


@pytest.fixture
def snapshot():
    return read_tree
