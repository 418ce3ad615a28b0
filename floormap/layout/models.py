"""Layout document dataclasses — the grid, its items, and the errors
raised when a document or an item reference is unusable."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


# ── Item variants ──────────────────────────────────────────────────


class ItemKind(str, Enum):
    TABLE = "table"
    OBJECT = "object"


class TableShape(str, Enum):
    SQUARE = "square"
    ROUND = "round"
    RECT = "rect"
    BOOTH = "booth"


class ObjectKind(str, Enum):
    WALL = "wall"
    DOOR = "door"
    BAR = "bar"
    PLANT = "plant"
    DIVIDER = "divider"
    CHAIR = "chair"
    VISUAL = "visual"


# ── Geometry value types ───────────────────────────────────────────


@dataclass(frozen=True)
class Rect:
    """Half-open cell rectangle ``[x, x+w) × [y, y+h)``."""

    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def overlaps(self, other: Rect) -> bool:
        """Strict overlap — rectangles that only share an edge do not overlap."""
        return (
            self.x < other.right and self.right > other.x
            and self.y < other.bottom and self.bottom > other.y
        )

    def cells(self) -> list[tuple[int, int]]:
        return [
            (cx, cy)
            for cy in range(self.y, self.bottom)
            for cx in range(self.x, self.right)
        ]


@dataclass(frozen=True)
class Bounds:
    """Inclusive cell bounds ``[min_x, max_x] × [min_y, max_y]``."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


# ── Placed items ───────────────────────────────────────────────────


@dataclass
class Table:
    """A seating table placed on the grid."""

    kind: ClassVar[ItemKind] = ItemKind.TABLE

    id: str
    origin_x: int
    origin_y: int
    span_x: int = 1
    span_y: int = 1
    seat_count: int = 2
    shape: TableShape = TableShape.SQUARE
    table_number: int = 0
    name: str = ""
    rotation_deg: int = 0
    scale: float = 1.0
    asset_ref: str | None = None
    section_id: str | None = None   # affinity tag, opaque to the engine

    @property
    def rect(self) -> Rect:
        return Rect(self.origin_x, self.origin_y, self.span_x, self.span_y)

    @property
    def participates_in_collision(self) -> bool:
        return True

    @property
    def subtype(self) -> str:
        return self.shape.value


@dataclass
class FurnitureObject:
    """A wall, door, bar, plant, divider, chair or decoration."""

    kind: ClassVar[ItemKind] = ItemKind.OBJECT

    id: str
    origin_x: int
    origin_y: int
    span_x: int = 1
    span_y: int = 1
    object_kind: ObjectKind = ObjectKind.VISUAL
    label: str | None = None
    visual_only: bool = False
    rotation_deg: int = 0
    scale: float = 1.0
    asset_ref: str | None = None

    @property
    def rect(self) -> Rect:
        return Rect(self.origin_x, self.origin_y, self.span_x, self.span_y)

    @property
    def participates_in_collision(self) -> bool:
        return not self.visual_only

    @property
    def is_wall_segment(self) -> bool:
        """Walls and dividers that take part in collision act as wall lines."""
        return (
            self.object_kind in (ObjectKind.WALL, ObjectKind.DIVIDER)
            and not self.visual_only
        )

    @property
    def subtype(self) -> str:
        return self.object_kind.value


PlacedItem = Union[Table, FurnitureObject]


# ── Document ───────────────────────────────────────────────────────


@dataclass
class GridLayout:
    """One floor layout of a restaurant.

    ``mask`` holds ``rows * cols`` flags in row-major order (1 = usable).
    ``extra`` keeps document keys the engine does not interpret
    (``floorColor``, timestamps, ...) so they survive a round-trip.
    """

    id: str
    rows: int
    cols: int
    mask: list[int]
    tables: list[Table] = field(default_factory=list)
    objects: list[FurnitureObject] = field(default_factory=list)
    restaurant_id: str = ""
    name: str = ""
    is_active: bool = False
    extra: dict = field(default_factory=dict)

    def items(self) -> list[PlacedItem]:
        """Tables first, then objects, each in document order."""
        return [*self.tables, *self.objects]

    def find(self, item_id: str) -> PlacedItem | None:
        for item in self.items():
            if item.id == item_id:
                return item
        return None

    def get(self, item_id: str) -> PlacedItem:
        item = self.find(item_id)
        if item is None:
            raise UnknownItemError(self.id, item_id)
        return item

    def item_ids(self) -> set[str]:
        return {item.id for item in self.items()}


# ── Errors ─────────────────────────────────────────────────────────


class LayoutError(Exception):
    """Base class for caller errors against a layout document."""


class LayoutParseError(LayoutError):
    """Raised when a layout document is structurally unusable."""

    def __init__(self, field_name: str, reason: str) -> None:
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Invalid layout field '{field_name}': {reason}")


class UnknownItemError(LayoutError, KeyError):
    """Raised when an operation names an item id absent from the layout."""

    def __init__(self, layout_id: str, item_id: str) -> None:
        self.layout_id = layout_id
        self.item_id = item_id
        super().__init__(f"Layout '{layout_id}' has no item '{item_id}'")

    def __str__(self) -> str:
        return self.args[0]
