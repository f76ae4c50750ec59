# src/brainboard/config.py

"""
Runtime settings for the host adapter.

Settings come from an optional `.brainboard.yml` in the working
directory; BRAINBOARD_FILE and BRAINBOARD_LOG_LEVEL override it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Final, Optional

import yaml


CONFIG_FILE_NAME: Final[str] = ".brainboard.yml"


@dataclass(slots=True)
class Settings:
    board_file: str = "brainfile.md"
    log_level: str = "WARNING"
    stats_column_limit: int = 4

    def board_path(self, cwd: Path) -> Path:
        return (cwd / self.board_file).resolve()


def load_settings(cwd: Optional[Path] = None) -> Settings:
    """
    Load settings for `cwd` (default: current directory).

    Unknown keys in the config file are ignored.
    """
    base = cwd or Path.cwd()
    settings = Settings()

    path = base / CONFIG_FILE_NAME
    if path.is_file():
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"{path}: config root must be a mapping")

        known = {f.name for f in fields(Settings)}
        for key, value in data.items():
            if key in known:
                setattr(settings, key, value)

    env_file = os.getenv("BRAINBOARD_FILE")
    if env_file:
        settings.board_file = env_file

    env_level = os.getenv("BRAINBOARD_LOG_LEVEL")
    if env_level:
        settings.log_level = env_level

    settings.log_level = str(settings.log_level).upper()
    try:
        settings.stats_column_limit = int(settings.stats_column_limit)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"stats_column_limit must be an integer, got {settings.stats_column_limit!r}"
        ) from e
    return settings
