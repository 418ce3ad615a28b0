"""Snap results and per-item snap profiles."""

from __future__ import annotations

from dataclasses import dataclass, field

from floormap.layout.models import ItemKind, TableShape, ObjectKind


@dataclass
class Guides:
    """Alignment guide coordinates for the UI, in grid units.

    ``v`` holds x positions of vertical guide lines, ``h`` y positions of
    horizontal ones.  Center guides may fall on a half cell.
    """

    v: list[float] = field(default_factory=list)
    h: list[float] = field(default_factory=list)


@dataclass
class SnapResult:
    x: int
    y: int
    guides: Guides = field(default_factory=Guides)


@dataclass(frozen=True)
class SnapProfile:
    """Which heuristics run for an item, besides alignment."""

    wall_hug: bool = False      # booths, bars and doors sit flush against walls
    wall_offset: bool = False   # general furniture keeps one cell from walls
    segment: bool = False       # walls and doors snap to wall endpoints/lines


_HUG = SnapProfile(wall_hug=True)
_OFFSET = SnapProfile(wall_offset=True)
_SEGMENT = SnapProfile(segment=True)
_ALIGN_ONLY = SnapProfile()

TABLE_PROFILES: dict[TableShape, SnapProfile] = {
    TableShape.SQUARE: _OFFSET,
    TableShape.ROUND: _OFFSET,
    TableShape.RECT: _OFFSET,
    TableShape.BOOTH: _HUG,
}

OBJECT_PROFILES: dict[ObjectKind, SnapProfile] = {
    ObjectKind.WALL: _SEGMENT,
    ObjectKind.DIVIDER: _SEGMENT,
    ObjectKind.DOOR: SnapProfile(wall_hug=True, segment=True),
    ObjectKind.BAR: _HUG,
    ObjectKind.PLANT: _OFFSET,
    ObjectKind.CHAIR: _OFFSET,
    ObjectKind.VISUAL: _ALIGN_ONLY,
}


def snap_profile(kind: ItemKind | str, subtype: str | None) -> SnapProfile:
    """Look up the profile for a table shape or object kind.

    Unknown subtypes fall back to the plainest profile for their kind.
    """
    kind = ItemKind(kind)
    sub = str(subtype or "").lower()
    if kind is ItemKind.TABLE:
        try:
            return TABLE_PROFILES[TableShape(sub)]
        except ValueError:
            return TABLE_PROFILES[TableShape.SQUARE]
    try:
        return OBJECT_PROFILES[ObjectKind(sub)]
    except ValueError:
        return OBJECT_PROFILES[ObjectKind.VISUAL]
