"""Defaults for items dropped from the palette."""

from __future__ import annotations

from dataclasses import dataclass

from floormap.layout.models import GridLayout, ObjectKind, TableShape


@dataclass(frozen=True)
class ObjectDefaults:
    span_x: int = 1
    span_y: int = 1
    label: str | None = None


OBJECT_DEFAULTS: dict[ObjectKind, ObjectDefaults] = {
    ObjectKind.WALL: ObjectDefaults(4, 1, "wall_h"),
    ObjectKind.DIVIDER: ObjectDefaults(2, 1, "partition"),
    ObjectKind.DOOR: ObjectDefaults(1, 1, "Door"),
    ObjectKind.BAR: ObjectDefaults(5, 1, "Bar"),
    ObjectKind.PLANT: ObjectDefaults(1, 1, ""),
}

_FALLBACK = ObjectDefaults()


def object_defaults(object_kind: ObjectKind) -> ObjectDefaults:
    return OBJECT_DEFAULTS.get(object_kind, _FALLBACK)


def default_seats(shape: TableShape) -> int:
    return 4 if shape is TableShape.BOOTH else 2


def default_table_span(shape: TableShape, seats: int) -> tuple[int, int]:
    """Footprint of a new table, sized to its seat count.

    Long booths seat six or more along a wall; big rounds need a 3×3
    footprint; a two-top square or rect fits in a single row.
    """
    if shape is TableShape.BOOTH:
        return (6, 2) if seats >= 6 else (2, 2)
    if shape is TableShape.ROUND:
        return (3, 3) if seats >= 9 else (2, 2)
    return (2, 1) if seats <= 2 else (2, 2)


def next_table_number(layout: GridLayout) -> int:
    """One more than the highest table number in use (1 for an empty floor)."""
    return max((t.table_number for t in layout.tables), default=0) + 1
