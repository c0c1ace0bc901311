"""
pytest configuration and shared fixtures

Usage:
    def test_something(runtime_config, template_bytes):
        assert runtime_config.render.scale_factor == 2.5
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from certbatch.config import runtime_config as runtime_config_module
from certbatch.config.runtime_config import OutputConfig, RuntimeConfig
from certbatch.models import FieldRegion, RecordSet


# ============================================================================
# Config fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RuntimeConfig:
    """Process-wide config pointed at a per-test temp directory"""
    config = RuntimeConfig(
        storage_dir=tmp_path / "storage",
        output=OutputConfig(output_dir=tmp_path / "output"),
    )
    monkeypatch.setattr(runtime_config_module, "_config", config)
    monkeypatch.setenv("CERTBATCH_CONFIG_PATH", str(tmp_path / "settings" / "config.yaml"))
    return config


@pytest.fixture
def output_dir(runtime_config: RuntimeConfig) -> Path:
    return runtime_config.output.output_dir


# ============================================================================
# Image fixtures
# ============================================================================

def make_template(width: int = 800, height: int = 600, fmt: str = "PNG") -> bytes:
    """Encoded plain white template"""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (255, 255, 255)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def template_bytes() -> bytes:
    """800x600 white PNG template"""
    return make_template()


@pytest.fixture
def template_image(template_bytes: bytes) -> Image.Image:
    with Image.open(io.BytesIO(template_bytes)) as image:
        return image.convert("RGB")


# ============================================================================
# Record / layout fixtures
# ============================================================================

@pytest.fixture
def sample_records() -> RecordSet:
    """Two attendees with id, name and email columns"""
    return RecordSet.from_rows(
        ["id", "name", "email"],
        [["1", "Omar", "o@x.com"], ["2", "Lina", "l@x.com"]],
    )


@pytest.fixture
def name_regions() -> list[FieldRegion]:
    """Only the name column has a region, (100,100)-(300,140) in preview space"""
    return [
        FieldRegion(),
        FieldRegion.from_corners((100, 100), (300, 140)),
        FieldRegion(),
    ]
