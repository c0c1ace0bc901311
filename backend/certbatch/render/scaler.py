"""
Coordinate scaler - preview-space regions to native-pixel draw targets

Responsibilities:
1. Normalise each region so p1 is top-left
2. Scale the top-left point and the width by the preview-to-native ratio

Computed once per batch; the result is shared read-only by every job.
"""

from __future__ import annotations

from ..config import get_config
from ..models import FieldRegion, ScaledRegion


class CoordinateScaler:
    """Preview-to-native coordinate mapping"""

    def __init__(self, scale_factor: float | None = None):
        if scale_factor is None:
            scale_factor = get_config().render.scale_factor
        if scale_factor <= 0:
            raise ValueError(f"scale_factor must be positive, got {scale_factor}")
        self.scale_factor = scale_factor

    def scale_region(self, region: FieldRegion) -> ScaledRegion:
        """Scale one region; an unset region stays zero-sized"""
        box = region.normalized()
        return ScaledRegion(
            origin=box.p1.scaled(self.scale_factor),
            width=box.width * self.scale_factor,
        )

    def scale(self, regions: list[FieldRegion]) -> list[ScaledRegion]:
        """Same cardinality and order as the input"""
        return [self.scale_region(region) for region in regions]
