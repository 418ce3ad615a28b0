"""Wall segment and junction dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shapely.geometry import LineString


class Direction(str, Enum):
    N = "N"
    E = "E"
    S = "S"
    W = "W"


class JunctionKind(str, Enum):
    STRAIGHT = "straight"   # two collinear walls meeting end to end
    L = "L"
    T = "T"
    CROSS = "cross"


@dataclass(frozen=True)
class WallSegment:
    """A wall or divider reduced to a line along its long axis.

    Endpoints are grid-line coordinates: a horizontal wall at ``(x, y)``
    spanning ``sx`` cells runs from ``(x, y)`` to ``(x + sx, y)``.
    """

    item_id: str
    x0: int
    y0: int
    x1: int
    y1: int

    @classmethod
    def from_rect(cls, item_id: str, x: int, y: int, span_x: int, span_y: int) -> WallSegment:
        if span_x >= span_y:
            return cls(item_id, x, y, x + span_x, y)
        return cls(item_id, x, y, x, y + span_y)

    @property
    def horizontal(self) -> bool:
        return self.y0 == self.y1

    @property
    def start(self) -> tuple[int, int]:
        return (self.x0, self.y0)

    @property
    def end(self) -> tuple[int, int]:
        return (self.x1, self.y1)

    @property
    def endpoints(self) -> tuple[tuple[int, int], tuple[int, int]]:
        return (self.start, self.end)

    @property
    def length(self) -> int:
        return abs(self.x1 - self.x0) + abs(self.y1 - self.y0)

    @property
    def line(self) -> LineString:
        return LineString([self.start, self.end])

    def translated(self, dx: int, dy: int) -> WallSegment:
        return WallSegment(self.item_id, self.x0 + dx, self.y0 + dy,
                           self.x1 + dx, self.y1 + dy)

    def contains_interior(self, x: int, y: int) -> bool:
        """True when ``(x, y)`` lies on the segment but is not an endpoint."""
        if self.horizontal:
            return y == self.y0 and min(self.x0, self.x1) < x < max(self.x0, self.x1)
        return x == self.x0 and min(self.y0, self.y1) < y < max(self.y0, self.y1)


@dataclass(frozen=True)
class WallJoint:
    """A point where two or more wall segments meet."""

    x: int
    y: int
    directions: frozenset[Direction]
    kind: JunctionKind
