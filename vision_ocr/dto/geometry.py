from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """Integer pixel coordinate with both components required."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    x: int = Field(..., strict=True, description="Horizontal pixel coordinate.")
    y: int = Field(..., strict=True, description="Vertical pixel coordinate.")


class Vertex(BaseModel):
    """Pixel coordinate as found in the full text tree.

    The service drops a coordinate from the JSON when it is zero, so either
    component may be absent and is then kept as None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    x: int | None = Field(default=None, strict=True, description="Horizontal pixel coordinate, if present.")
    y: int | None = Field(default=None, strict=True, description="Vertical pixel coordinate, if present.")


def _coord(value: int | None) -> int:
    return 0 if value is None else value


class _Quad(BaseModel):
    """Measurements shared by both quadrilateral variants.

    Vertex order is the one the service uses: 0 top-left, 1 top-right,
    2 bottom-right, 3 bottom-left. Width and height are taken between
    vertices 1 and 3, so a rotated or reordered quad can measure negative.
    The value is returned unchanged in that case.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    def left_top(self) -> Point | Vertex:
        return self.vertices[1]

    def width(self) -> int:
        return _coord(self.vertices[3].x) - _coord(self.vertices[1].x)

    def height(self) -> int:
        return _coord(self.vertices[3].y) - _coord(self.vertices[1].y)

    def to_rect(self) -> tuple[int, int, int, int]:
        """Return ``(left, top, width, height)``."""
        corner = self.left_top()
        return _coord(corner.x), _coord(corner.y), self.width(), self.height()


class BoundingPoly(_Quad):
    """Quadrilateral of a flat text annotation; every coordinate is required."""

    vertices: tuple[Point, Point, Point, Point] = Field(..., description="Exactly four corners.")


class BoundingBox(_Quad):
    """Quadrilateral of a node in the full text tree; coordinates may be absent."""

    vertices: tuple[Vertex, Vertex, Vertex, Vertex] = Field(..., description="Exactly four corners.")
