"""
DirMirror configuration management.

Provides centralized configuration with validation using Pydantic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_HOME = Path.home() / ".dirmirror"


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_enabled: bool = True
    console_enabled: bool = False
    json_format: bool = False
    log_directory: Path = Field(default_factory=lambda: DEFAULT_HOME / "logs")

    @field_validator("log_directory", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class MirrorConfig(BaseModel):
    """Configuration for the mirror operation itself."""

    sort_entries: bool = True
    recursive_file_prune: bool = False
    default_log_file: Path = Field(
        default_factory=lambda: DEFAULT_HOME / "logs" / "mirror.log"
    )

    @field_validator("default_log_file", mode="before")
    @classmethod
    def expand_log_file(cls, v: str | Path) -> Path:
        return Path(v).expanduser().resolve()


class DirMirrorConfig(BaseModel):
    """Main DirMirror configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    mirror: MirrorConfig = Field(default_factory=MirrorConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> DirMirrorConfig:
        """Load configuration from file or create default."""
        if config_path is None:
            config_path = DEFAULT_HOME / "config.json"

        if config_path.exists():
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = DEFAULT_HOME / "config.json"

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, default=str)

    def ensure_directories(self) -> None:
        """Create all required directories."""
        if self.logging.file_enabled:
            self.logging.log_directory.mkdir(parents=True, exist_ok=True)


def get_default_config() -> DirMirrorConfig:
    """Get the default configuration."""
    return DirMirrorConfig()


def load_config(config_path: Path | None = None) -> DirMirrorConfig:
    """Load or create configuration."""
    config = DirMirrorConfig.load(config_path)
    config.ensure_directories()
    return config
