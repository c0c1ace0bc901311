"""
Region models - where a field's text is drawn

FieldRegion lives in preview space (the layout editor works on a
downscaled image); ScaledRegion is the native-pixel draw target.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """2D point"""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    @property
    def is_origin(self) -> bool:
        return self.x == 0 and self.y == 0

    def scaled(self, factor: float) -> Point:
        return Point(x=self.x * factor, y=self.y * factor)


class FieldRegion(BaseModel):
    """Rectangle defined by two corner points, in any drag order"""
    model_config = ConfigDict(frozen=True)

    p1: Point = Point()
    p2: Point = Point()

    @classmethod
    def from_corners(
        cls, p1: tuple[float, float], p2: tuple[float, float]
    ) -> FieldRegion:
        return cls(p1=Point(x=p1[0], y=p1[1]), p2=Point(x=p2[0], y=p2[1]))

    @property
    def is_unset(self) -> bool:
        """Both corners at origin: the field is not rendered"""
        return self.p1.is_origin and self.p2.is_origin

    def normalized(self) -> FieldRegion:
        """Return the same rectangle with p1 top-left and p2 bottom-right"""
        return FieldRegion(
            p1=Point(x=min(self.p1.x, self.p2.x), y=min(self.p1.y, self.p2.y)),
            p2=Point(x=max(self.p1.x, self.p2.x), y=max(self.p1.y, self.p2.y)),
        )

    @property
    def width(self) -> float:
        return abs(self.p1.x - self.p2.x)

    def to_corners(self) -> list[list[float]]:
        return [[self.p1.x, self.p1.y], [self.p2.x, self.p2.y]]


class ScaledRegion(BaseModel):
    """Top-left draw point and box width in native pixels"""
    model_config = ConfigDict(frozen=True)

    origin: Point = Point()
    width: float = 0.0

    @property
    def is_empty(self) -> bool:
        """A zero-sized region means omit the field, not draw a point"""
        return self.origin.is_origin and self.width == 0
