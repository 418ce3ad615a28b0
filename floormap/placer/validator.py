"""Placement validator — clamp, mask check and collision check.

``validate_placement`` is the single gate every mutation passes through.
It never raises for a conflict: it returns ``Rejected(reason)`` and the
caller keeps the previous document.
"""

from __future__ import annotations

import logging

from floormap.layout.grid import is_cell_active
from floormap.layout.models import GridLayout, Rect

from .geometry import clamp
from .models import Accepted, Rejected, RejectReason, PlacementResult


log = logging.getLogger(__name__)


def clamp_to_grid(
    x: int, y: int, span_x: int, span_y: int, cols: int, rows: int,
) -> tuple[int, int]:
    """Clamp an origin so the rectangle stays inside the grid.

    Items wider than the grid are pinned to column/row 0.
    """
    return (
        clamp(x, 0, max(0, cols - span_x)),
        clamp(y, 0, max(0, rows - span_y)),
    )


def mask_allows(layout: GridLayout, x: int, y: int, span_x: int, span_y: int) -> bool:
    """True only if every covered cell is inside the grid and active."""
    for cy in range(y, y + span_y):
        for cx in range(x, x + span_x):
            if not is_cell_active(layout, cx, cy):
                return False
    return True


def collides(layout: GridLayout, candidate: Rect, ignore_id: str | None = None) -> bool:
    """True if *candidate* overlaps any other collision-participating item."""
    for item in layout.items():
        if item.id == ignore_id or not item.participates_in_collision:
            continue
        if candidate.overlaps(item.rect):
            return True
    return False


def colliding_ids(layout: GridLayout, candidate: Rect, ignore_id: str | None = None) -> list[str]:
    """Ids of every blocking item *candidate* overlaps, in document order."""
    return [
        item.id for item in layout.items()
        if item.id != ignore_id
        and item.participates_in_collision
        and candidate.overlaps(item.rect)
    ]


def validate_placement(
    layout: GridLayout,
    x: int, y: int,
    span_x: int, span_y: int,
    *,
    ignore_id: str | None = None,
    participates: bool = True,
) -> PlacementResult:
    """Clamp → mask check → collision check, in that order.

    Parameters
    ----------
    layout : GridLayout
        The document the item is placed into.
    x, y : int
        Requested origin cell.
    span_x, span_y : int
        Item footprint in cells.
    ignore_id : str, optional
        Id of the item being moved; it is not compared against itself.
    participates : bool
        False for visual-only decorations, which skip the collision test.

    Returns
    -------
    Accepted | Rejected
    """
    cx, cy = clamp_to_grid(x, y, span_x, span_y, layout.cols, layout.rows)

    if not mask_allows(layout, cx, cy, span_x, span_y):
        log.debug("Rejected (%d, %d) span %d×%d: outside shape", cx, cy, span_x, span_y)
        return Rejected(RejectReason.OUTSIDE_SHAPE)

    if participates and collides(layout, Rect(cx, cy, span_x, span_y), ignore_id):
        log.debug("Rejected (%d, %d) span %d×%d: collision", cx, cy, span_x, span_y)
        return Rejected(RejectReason.COLLISION)

    return Accepted(cx, cy)
