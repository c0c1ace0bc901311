"""
Layout preset loader - per-column text regions from YAML

Responsibilities:
- Parse a layout document into typed regions
- Align regions with a record header row (missing column -> unset)
- Save layouts back in the same format

Document shape:
    scale_factor: 2.5        # optional
    font_size: 40            # optional
    regions:
      name: [[100, 100], [300, 140]]

Usage:
    layout = LayoutLoader.load("layouts/attendance.yaml")
    regions = layout.regions_for(record_set.columns)
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ..models import FieldRegion


class FieldLayout(BaseModel):
    """Per-column regions in preview space"""
    scale_factor: float | None = None
    font_size: float | None = None
    regions: dict[str, FieldRegion] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> FieldLayout:
        regions = {
            column: FieldRegion.from_corners(tuple(corners[0]), tuple(corners[1]))
            for column, corners in (data.get("regions") or {}).items()
        }
        return cls(
            scale_factor=data.get("scale_factor"),
            font_size=data.get("font_size"),
            regions=regions,
        )

    def to_dict(self) -> dict:
        data: dict = {"regions": {c: r.to_corners() for c, r in self.regions.items()}}
        if self.scale_factor is not None:
            data["scale_factor"] = self.scale_factor
        if self.font_size is not None:
            data["font_size"] = self.font_size
        return data

    def regions_for(self, columns: list[str]) -> list[FieldRegion]:
        """Regions in column order; columns without a region are unset"""
        return [self.regions.get(column, FieldRegion()) for column in columns]


class LayoutLoader:
    """Layout preset loader"""

    @staticmethod
    def load(path: str | Path) -> FieldLayout:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Layout file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return FieldLayout.from_dict(data)

    @staticmethod
    def save(layout: FieldLayout, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(layout.to_dict(), f, allow_unicode=True, sort_keys=False)
        return path
