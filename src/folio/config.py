"""Configuration loaded from .folio.toml and env vars.

Loading order: defaults → TOML file → env vars.
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
CONFIG_SEARCH_PATHS = [Path("."), Path.home() / ".config" / "folio"]

# env var -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "FOLIO_STORAGE_DIR": ("storage", "directory"),
    "FOLIO_AUTOSAVE_INTERVAL": ("autosave", "interval_seconds"),
    "FOLIO_JPEG_QUALITY": ("images", "jpeg_quality"),
    "FOLIO_ENV": ("app", "environment"),
}


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class StorageConfig(BaseModel):
    """[storage] section."""

    directory: str = str(Path.home() / ".local" / "share" / "folio")


class AutosaveConfig(BaseModel):
    """[autosave] section."""

    interval_seconds: float = Field(default=1.0, gt=0)


class ImagesConfig(BaseModel):
    """[images] section."""

    jpeg_quality: float = Field(default=0.9, gt=0, le=1)
    max_upload_bytes: int = 5 * 1024 * 1024


class AppConfig(BaseModel):
    """[app] section."""

    environment: Environment = Environment.PRODUCTION


class FolioConfig(BaseModel):
    """Top-level configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    autosave: AutosaveConfig = Field(default_factory=AutosaveConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    @property
    def is_development(self) -> bool:
        """Development mode only toggles debug affordances."""
        return self.app.environment is Environment.DEVELOPMENT

    @property
    def storage_dir(self) -> Path:
        return Path(self.storage.directory).expanduser()


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Build the configuration from defaults, a TOML file and env vars.

    Without *path* the first existing file wins: ``.folio.toml`` in each
    of CONFIG_SEARCH_PATHS, then ``~/.config/folio/config.toml``.
    """
    toml_path = Path(path) if path is not None else _find_config_file()
    data: dict[str, object] = {}
    if toml_path is not None:
        if toml_path.is_file():
            data = _read_toml(toml_path)
            logger.info("Loaded config from %s", toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)

    try:
        config = FolioConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid configuration, using defaults: %s", exc)
        config = FolioConfig()

    return _apply_env_vars(config)


def _find_config_file() -> Path | None:
    candidates = [directory / CONFIG_FILENAME for directory in CONFIG_SEARCH_PATHS]
    candidates.append(Path.home() / ".config" / "folio" / "config.toml")
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _read_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Overlay FOLIO_* environment variables; invalid values are ignored."""
    present = [name for name in ENV_OVERRIDES if name in os.environ]
    if not present:
        return config

    data = config.model_dump()
    for name in present:
        section, field = ENV_OVERRIDES[name]
        data[section][field] = os.environ[name]

    try:
        return FolioConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid environment overrides: %s", exc)
        return config
