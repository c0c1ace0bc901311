"""
Runtime configuration - reads certbatch.yaml

Responsibilities:
- Load rendering/output/concurrency/mail parameters
- Environment variable overrides (CERTBATCH_ prefix)
- Type-safe configuration access
- Logging setup for entry points
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


DEFAULT_CONFIG_PATHS = (Path("certbatch.yaml"), Path("config/certbatch.yaml"))


class RenderConfig(BaseModel):
    """Rendering parameters"""

    scale_factor: float = 2.5
    font_size: float = 40.0
    font_path: str | None = None
    text_color: tuple[int, int, int] = (0, 0, 0)
    line_spacing: float = 1.2
    shaper: str = "reverse"


class OutputConfig(BaseModel):
    """Output naming and location"""

    output_dir: Path = Path("output")
    naming: str = "overwrite"


class ConcurrencyConfig(BaseModel):
    """Worker pool sizing"""

    max_workers: int = 0

    def resolve_workers(self) -> int:
        """0 means one worker per available CPU"""
        if self.max_workers > 0:
            return self.max_workers
        return os.cpu_count() or 1


class MailConfig(BaseModel):
    """Mail relay configuration"""

    relay_host: str = "smtp.gmail.com"
    relay_port: int = 465
    security: str = "ssl"
    subject: str = "شهادة حضور"
    attachment_name: str = "Certificate.png"
    email_column: str = "email"
    timeout_sec: int = 30


class LoggingConfig(BaseModel):
    """Logging configuration"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: Path = Path("certbatch.log")


class RuntimeConfig(BaseSettings):
    """Runtime configuration (environment variables override file values)"""

    storage_dir: Path = Path("storage")

    render: RenderConfig = Field(default_factory=RenderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    concurrency: ConcurrencyConfig = Field(default_factory=ConcurrencyConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "CERTBATCH_",
        "env_nested_delimiter": "__",
        "arbitrary_types_allowed": True,
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """Load configuration from a YAML file"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            render=RenderConfig(**cls._extract(data, "render")),
            output=OutputConfig(**cls._extract(data, "output")),
            concurrency=ConcurrencyConfig(**cls._extract(data, "concurrency")),
            mail=MailConfig(**cls._extract(data, "mail")),
            logging=LoggingConfig(**cls._extract(data, "logging")),
        )
        if "storage_dir" in data:
            config.storage_dir = Path(data["storage_dir"])

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """Flatten a section; entries written as {default: x} collapse to x"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """Resolve a relative font path against the config file directory"""
        if self.render.font_path:
            font_path = Path(self.render.font_path)
            if not font_path.is_absolute():
                self.render.font_path = str((base_dir / font_path).resolve())

    def get_batch_dir(self, batch_id: str) -> Path:
        """Directory holding one batch's persisted report"""
        return self.storage_dir / "batches" / batch_id

    def ensure_dirs(self) -> None:
        """Make sure output and storage directories exist"""
        self.output.output_dir.mkdir(parents=True, exist_ok=True)
        (self.storage_dir / "batches").mkdir(parents=True, exist_ok=True)


def configure_logging(config: LoggingConfig) -> None:
    """Install root handlers according to the logging section"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_to_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


# process-wide instance
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """Get the global configuration (lazy load)"""
    global _config
    if _config is None:
        default_path = DEFAULT_CONFIG_PATHS[0]
        for candidate in DEFAULT_CONFIG_PATHS:
            if candidate.exists():
                default_path = candidate
                break
        _config = RuntimeConfig.from_yaml(default_path)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """Reload the global configuration"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATHS[0]
    _config = RuntimeConfig.from_yaml(path)
    return _config
