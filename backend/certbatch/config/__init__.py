"""
Configuration layer - runtime settings, credentials and layout presets

Responsibilities:
- Load certbatch.yaml (runtime parameters, env overrides)
- Load/create/save the user settings document holding mail credentials
- Load field layout presets produced by the layout editor
"""

from .credentials_store import default_config_path, load_app_config, save_app_config
from .layout_loader import FieldLayout, LayoutLoader
from .runtime_config import (
    RuntimeConfig,
    configure_logging,
    get_config,
    reload_config,
)

__all__ = [
    "RuntimeConfig",
    "get_config",
    "reload_config",
    "configure_logging",
    "load_app_config",
    "save_app_config",
    "default_config_path",
    "FieldLayout",
    "LayoutLoader",
]
