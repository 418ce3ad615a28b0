"""Snap heuristics — the individual stages composed by the snap engine.

Every stage takes an already clamped origin and returns a clamped origin.
Stages only propose small adjustments (see ``SnapRules``); anything
further away is left to the user.  Ties between equally distant
proposals go to the first one discovered, so results are deterministic
for a given item order.

A proposal that moves the item onto an inactive cell or onto a blocking
item is skipped: snapping never steers an item into a conflict the
validator would then reject.  A zero-length correction is always
allowed, it only records a guide.
"""

from __future__ import annotations

import logging

from floormap.config import SnapRules
from floormap.layout.models import GridLayout, Rect
from floormap.placer.geometry import manhattan, euclidean, spans_overlap
from floormap.placer.validator import clamp_to_grid, collides, mask_allows
from floormap.walls.connectivity import (
    wall_segments, collinear_overlap, corner_points, project_onto,
)
from floormap.walls.models import WallSegment

from .models import Guides


log = logging.getLogger(__name__)


def _steers_into_conflict(
    layout: GridLayout,
    moved: bool,
    x: int, y: int, span_x: int, span_y: int,
    exclude_id: str | None,
) -> bool:
    if not moved:
        return False
    if not mask_allows(layout, x, y, span_x, span_y):
        return True
    return collides(layout, Rect(x, y, span_x, span_y), exclude_id)


def _walls(layout: GridLayout, exclude_id: str | None):
    return [o for o in layout.objects if o.is_wall_segment and o.id != exclude_id]


# ── 1. Wall hug ────────────────────────────────────────────────────


def snap_to_nearby_walls(
    layout: GridLayout,
    x: int, y: int, span_x: int, span_y: int,
    exclude_id: str | None,
    rules: SnapRules,
) -> tuple[int, int]:
    """Pull the item flush against a wall it already faces.

    For every wall whose X range overlaps the item, propose the rows just
    above and just below it; symmetrically for Y overlap.  The closest
    proposal (Manhattan) wins if it is within ``wall_hug_radius``.
    """
    walls = _walls(layout, exclude_id)
    if not walls:
        return (x, y)
    best: tuple[int, int] | None = None
    best_score = float("inf")

    def consider(cx: int, cy: int) -> None:
        nonlocal best, best_score
        cx, cy = clamp_to_grid(cx, cy, span_x, span_y, layout.cols, layout.rows)
        score = manhattan(cx, cy, x, y)
        if score >= best_score:
            return
        if _steers_into_conflict(layout, (cx, cy) != (x, y), cx, cy, span_x, span_y, exclude_id):
            return
        best, best_score = (cx, cy), score

    for w in walls:
        wr = w.rect
        if spans_overlap(x, span_x, wr.x, wr.w):
            consider(x, wr.y - span_y)     # above
            consider(x, wr.bottom)         # below
        if spans_overlap(y, span_y, wr.y, wr.h):
            consider(wr.x - span_x, y)     # left
            consider(wr.right, y)          # right

    if best is not None and best_score <= rules.wall_hug_radius:
        return best
    return (x, y)


# ── 2. Alignment ───────────────────────────────────────────────────


def alignment_snap(
    layout: GridLayout,
    x: int, y: int, span_x: int, span_y: int,
    exclude_id: str | None,
    rules: SnapRules,
) -> tuple[int, int, Guides]:
    """Align left/right/center edges with other items.

    Centers are compared in half-cell units so an odd span can still
    center-align when an integer shift achieves it.  The X and Y
    corrections are chosen independently, each the smallest within
    ``alignment_radius``; the aligned coordinate is reported as a guide.
    """
    others = [
        item for item in layout.items()
        if item.id != exclude_id and item.participates_in_collision
    ]
    guides = Guides()
    if not others:
        return (x, y, guides)
    thr = rules.alignment_radius
    my_cx2 = x * 2 + span_x
    my_cy2 = y * 2 + span_y

    best_dx: int | None = None
    best_dy: int | None = None

    def consider_dx(dx: int, guide: float) -> None:
        nonlocal best_dx
        if abs(dx) > thr:
            return
        if best_dx is not None and abs(dx) >= abs(best_dx):
            return
        if _steers_into_conflict(layout, dx != 0, x + dx, y, span_x, span_y, exclude_id):
            return
        best_dx = dx
        guides.v = [guide]

    def consider_dy(dy: int, guide: float) -> None:
        nonlocal best_dy
        if abs(dy) > thr:
            return
        if best_dy is not None and abs(dy) >= abs(best_dy):
            return
        if _steers_into_conflict(layout, dy != 0, x, y + dy, span_x, span_y, exclude_id):
            return
        best_dy = dy
        guides.h = [guide]

    for item in others:
        r = item.rect
        consider_dx(r.x - x, r.x)                       # left
        consider_dx(r.right - (x + span_x), r.right)    # right
        dx2 = (r.x * 2 + r.w) - my_cx2
        if dx2 % 2 == 0:
            consider_dx(dx2 // 2, (r.x * 2 + r.w) / 2)  # center

        consider_dy(r.y - y, r.y)                       # top
        consider_dy(r.bottom - (y + span_y), r.bottom)  # bottom
        dy2 = (r.y * 2 + r.h) - my_cy2
        if dy2 % 2 == 0:
            consider_dy(dy2 // 2, (r.y * 2 + r.h) / 2)  # center

    nx = x + (best_dx or 0)
    ny = y + (best_dy or 0)

    # Each axis was checked alone; the combined move may still clip a
    # corner.  Keep the X correction in that case.
    if best_dy and _steers_into_conflict(layout, True, nx, ny, span_x, span_y, exclude_id):
        ny = y
        guides.h = []

    nx, ny = clamp_to_grid(nx, ny, span_x, span_y, layout.cols, layout.rows)
    return (nx, ny, guides)


# ── 3. Wall offset ─────────────────────────────────────────────────


def wall_offset_snap(
    layout: GridLayout,
    x: int, y: int, span_x: int, span_y: int,
    exclude_id: str | None,
    rules: SnapRules,
) -> tuple[int, int]:
    """Keep general furniture exactly one clearance cell away from walls.

    Only walls that face the item (their long extent overlaps the item's
    extent on the same axis) and that are within ``wall_offset_radius``
    are considered.  The item goes to whichever side of the wall its
    center is on.
    """
    walls = _walls(layout, exclude_id)
    if not walls:
        return (x, y)

    gap = rules.wall_offset_clearance
    best: tuple[int, int] | None = None
    best_dist = float("inf")

    def consider(cx: int, cy: int) -> None:
        nonlocal best, best_dist
        clamped = clamp_to_grid(cx, cy, span_x, span_y, layout.cols, layout.rows)
        if clamped != (cx, cy):
            return  # clearance cannot be kept inside the grid
        dist = manhattan(cx, cy, x, y)
        if dist > rules.wall_offset_radius or dist >= best_dist:
            return
        if _steers_into_conflict(layout, (cx, cy) != (x, y), cx, cy, span_x, span_y, exclude_id):
            return
        best, best_dist = (cx, cy), dist

    for w in walls:
        wr = w.rect
        if wr.w >= wr.h:
            if not spans_overlap(x, span_x, wr.x, wr.w):
                continue
            if y * 2 + span_y < wr.y * 2 + wr.h:
                consider(x, wr.y - gap - span_y)
            else:
                consider(x, wr.bottom + gap)
        else:
            if not spans_overlap(y, span_y, wr.y, wr.h):
                continue
            if x * 2 + span_x < wr.x * 2 + wr.w:
                consider(wr.x - gap - span_x, y)
            else:
                consider(wr.right + gap, y)

    return best if best is not None else (x, y)


# ── 4. Wall endpoints, lines, corners and parallels ────────────────


def segment_snap(
    layout: GridLayout,
    x: int, y: int, span_x: int, span_y: int,
    exclude_id: str | None,
    rules: SnapRules,
) -> tuple[int, int]:
    """Snap a dragged wall or door onto the existing wall network.

    Candidate translations, scored by Euclidean distance:

    - endpoint: a moving endpoint onto another wall's endpoint
    - line: a moving endpoint onto its projection on another wall
    - corner: a moving endpoint onto a horizontal/vertical crossing
    - parallel: onto the line of a same-orientation wall (looser radius,
      small penalty so exact endpoint matches win ties)

    The closest candidate that does not leave the segment overlapping
    another wall along the same line, and does not put the item on a
    wall's cells or an inactive cell, wins.  Touching end to end is fine.
    """
    others = wall_segments(layout, exclude_id)
    if not others:
        return (x, y)

    moving = WallSegment.from_rect(exclude_id or "", x, y, span_x, span_y)
    candidates: list[tuple[float, int, int]] = []

    def add(dx: int, dy: int, dist: float, radius: float) -> None:
        if dist <= radius:
            candidates.append((dist, dx, dy))

    for seg in others:
        for ex, ey in seg.endpoints:
            for mx, my in moving.endpoints:
                add(ex - mx, ey - my, euclidean(ex, ey, mx, my), rules.endpoint_radius)

    for seg in others:
        for mx, my in moving.endpoints:
            px, py = project_onto(seg, mx, my)
            add(px - mx, py - my, euclidean(px, py, mx, my), rules.endpoint_radius)

    for cx, cy in corner_points(others):
        for mx, my in moving.endpoints:
            add(cx - mx, cy - my, euclidean(cx, cy, mx, my), rules.endpoint_radius)

    for seg in others:
        if seg.horizontal != moving.horizontal:
            continue
        if moving.horizontal:
            dy = seg.y0 - moving.y0
            add(0, dy, abs(dy) + rules.parallel_penalty, rules.parallel_radius + rules.parallel_penalty)
        else:
            dx = seg.x0 - moving.x0
            add(dx, 0, abs(dx) + rules.parallel_penalty, rules.parallel_radius + rules.parallel_penalty)

    # Stable sort: equal distances keep discovery order.
    candidates.sort(key=lambda c: c[0])

    for dist, dx, dy in candidates:
        nx, ny = clamp_to_grid(x + dx, y + dy, span_x, span_y, layout.cols, layout.rows)
        placed = moving.translated(nx - x, ny - y)
        if any(collinear_overlap(placed, seg) for seg in others):
            continue
        if _steers_into_conflict(layout, (nx, ny) != (x, y), nx, ny, span_x, span_y, exclude_id):
            continue
        log.debug("Segment snap: (%d, %d) → (%d, %d), distance %.2f", x, y, nx, ny, dist)
        return (nx, ny)

    return clamp_to_grid(x, y, span_x, span_y, layout.cols, layout.rows)
