"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- WallabagConfig: Server URL, API credentials and HTTP settings
- SyncConfig: Vault folder and file naming settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.errors import ConfigError
from .core.types import Credentials


@dataclass
class WallabagConfig:
    """Configuration for the Wallabag server connection.

    Each credential falls back to its environment variable when unset.

    Attributes:
        base_url: Server root, e.g. "https://app.wallabag.it" (env WALLABAG_URL)
        client_id: API client id (env WALLABAG_CLIENT_ID)
        client_secret: API client secret (env WALLABAG_CLIENT_SECRET)
        username: Account username (env WALLABAG_USERNAME)
        password: Account password (env WALLABAG_PASSWORD)
        timeout_seconds: HTTP request timeout
        per_page: Entries requested per page
        trust_env: Whether to respect system proxy settings
    """

    base_url: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    username: str | None = None
    password: str | None = None
    timeout_seconds: float = 20.0
    per_page: int = 30
    trust_env: bool = True


@dataclass
class SyncConfig:
    """Configuration for the local vault layout.

    Attributes:
        folder: Vault folder that receives synced entries
        extension: File extension for entry notes
        max_title_length: Maximum length of the file name stem
        to_read_tag: Tag label that sets `to_read: true` in front matter
    """

    folder: str = "wallabag"
    extension: str = ".md"
    max_title_length: int = 190
    to_read_tag: str = "TO_READ"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file (requires dir)
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        dir: Directory for the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "sync.jsonl"
    dir: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    wallabag: WallabagConfig = field(default_factory=WallabagConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        # An empty section ("sync:") loads as None and keeps the defaults.
        if key not in data or value is None:
            continue
        if isinstance(data[key], dict) and not isinstance(value, dict):
            raise ConfigError(f"Config section '{key}' must be a mapping, got {type(value).__name__}")
        if isinstance(value, dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "wallabag": {
            "base_url": cfg.wallabag.base_url,
            "client_id": cfg.wallabag.client_id,
            "client_secret": cfg.wallabag.client_secret,
            "username": cfg.wallabag.username,
            "password": cfg.wallabag.password,
            "timeout_seconds": cfg.wallabag.timeout_seconds,
            "per_page": cfg.wallabag.per_page,
            "trust_env": cfg.wallabag.trust_env,
        },
        "sync": {
            "folder": cfg.sync.folder,
            "extension": cfg.sync.extension,
            "max_title_length": cfg.sync.max_title_length,
            "to_read_tag": cfg.sync.to_read_tag,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "dir": cfg.logging.dir,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        wallabag=WallabagConfig(**data["wallabag"]),
        sync=SyncConfig(**data["sync"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_base_url(cfg: WallabagConfig) -> str:
    """Get the Wallabag server URL from inline config or environment variable."""
    url = cfg.base_url or os.getenv("WALLABAG_URL")
    if not url:
        raise ConfigError(
            "Wallabag server URL is required. Set WALLABAG_URL environment variable "
            "or configure wallabag.base_url in config."
        )
    return url.rstrip("/")


def get_credentials(cfg: WallabagConfig) -> Credentials:
    """Get API credentials from inline config or environment variables.

    Raises:
        ConfigError: If any of the four values is missing
    """
    values = {
        "client_id": cfg.client_id or os.getenv("WALLABAG_CLIENT_ID"),
        "client_secret": cfg.client_secret or os.getenv("WALLABAG_CLIENT_SECRET"),
        "username": cfg.username or os.getenv("WALLABAG_USERNAME"),
        "password": cfg.password or os.getenv("WALLABAG_PASSWORD"),
    }
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigError(f"Missing Wallabag credentials: {', '.join(missing)}")
    return Credentials(**values)
