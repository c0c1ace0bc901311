"""
Credential store - persisted mail account settings

Lifecycle:
- load once at startup from a well-known location
- absent -> default empty-credential document is created and written
- re-persisted on explicit edit via save_app_config

Usage:
    app_config = load_app_config()
    dispatcher = EmailDispatcher(app_config.email)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from ..interfaces import OutputIOError
from ..models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CERTBATCH_CONFIG_PATH"


def default_config_path() -> Path:
    """~/.config/certbatch/config.yaml unless CERTBATCH_CONFIG_PATH is set"""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path.home() / ".config" / "certbatch" / "config.yaml"


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load settings, creating the default document when absent"""
    config_path = Path(path) if path else default_config_path()
    if not config_path.exists():
        logger.info(f"No settings at {config_path}, writing defaults")
        app_config = AppConfig()
        save_app_config(app_config, config_path)
        return app_config

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(**data)


def save_app_config(app_config: AppConfig, path: str | Path | None = None) -> Path:
    """Persist settings"""
    config_path = Path(path) if path else default_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(app_config.model_dump(mode="json"), f, allow_unicode=True)
    except OSError as e:
        raise OutputIOError(f"Cannot write settings {config_path}: {e}") from e
    return config_path
