"""Inventario configuration.

Settings come from the environment:

    INVENTARIO_DATA_DIR   directory holding the JSON tables (default: <project>/data)
    INVENTARIO_LOG_LEVEL  logging level name (default: WARNING)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@dataclass(frozen=True)
class Settings:
    """Inventario configuration settings."""

    DATA_DIR: Path = _DEFAULT_DATA_DIR
    LOG_LEVEL: str = "WARNING"


def get_settings() -> Settings:
    """Load settings from the environment."""
    data_dir = os.environ.get("INVENTARIO_DATA_DIR")
    return Settings(
        DATA_DIR=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        LOG_LEVEL=os.environ.get("INVENTARIO_LOG_LEVEL", "WARNING").upper(),
    )


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_settings(), name)


settings = _LazySettings()
