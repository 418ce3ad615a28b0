"""Snap engine — compose the heuristics into one drop/drag adjustment."""

from __future__ import annotations

import logging

from floormap.config import SNAP_RULES, SnapRules
from floormap.layout.models import GridLayout, ItemKind
from floormap.layout.parsing import normalize_span
from floormap.placer.validator import clamp_to_grid

from .heuristics import (
    snap_to_nearby_walls, alignment_snap, wall_offset_snap, segment_snap,
)
from .models import Guides, SnapResult, snap_profile


log = logging.getLogger(__name__)


def compute_snap(
    layout: GridLayout,
    raw_x: int, raw_y: int,
    span_x: int, span_y: int,
    kind: ItemKind | str,
    subtype: str | None = None,
    *,
    disable_snap: bool = False,
    exclude_id: str | None = None,
    rules: SnapRules = SNAP_RULES,
) -> SnapResult:
    """Adjust a raw drop/drag cell for an item of the given span and type.

    Stages, each fed the previous stage's output and re-clamped to the
    grid afterwards:

      1. wall hug       booths, bars, doors
      2. alignment      every item
      3. wall offset    general furniture
      4. segment snap   walls, dividers, doors

    ``disable_snap`` (the "hold Shift" affordance) skips straight to the
    clamp.  ``exclude_id`` is the item being moved, which must not snap to
    itself.

    Returns
    -------
    SnapResult
        The adjusted origin plus alignment guides for the UI.  The guide
        on an axis is dropped when a later stage moved that axis again.
    """
    span_x = normalize_span(span_x)
    span_y = normalize_span(span_y)
    cols, rows = layout.cols, layout.rows

    x, y = clamp_to_grid(int(raw_x), int(raw_y), span_x, span_y, cols, rows)
    if disable_snap:
        return SnapResult(x, y, Guides())

    profile = snap_profile(kind, subtype)

    if profile.wall_hug:
        hx, hy = snap_to_nearby_walls(layout, x, y, span_x, span_y, exclude_id, rules)
        if (hx, hy) != (x, y):
            log.debug("Wall hug: (%d, %d) → (%d, %d)", x, y, hx, hy)
        x, y = clamp_to_grid(hx, hy, span_x, span_y, cols, rows)

    x, y, guides = alignment_snap(layout, x, y, span_x, span_y, exclude_id, rules)
    x, y = clamp_to_grid(x, y, span_x, span_y, cols, rows)
    aligned = (x, y)

    if profile.wall_offset:
        x, y = wall_offset_snap(layout, x, y, span_x, span_y, exclude_id, rules)
        x, y = clamp_to_grid(x, y, span_x, span_y, cols, rows)

    if profile.segment:
        x, y = segment_snap(layout, x, y, span_x, span_y, exclude_id, rules)
        x, y = clamp_to_grid(x, y, span_x, span_y, cols, rows)

    if x != aligned[0]:
        guides.v = []
    if y != aligned[1]:
        guides.h = []

    if (x, y) != (raw_x, raw_y):
        log.debug("Snapped %s/%s from (%s, %s) to (%d, %d)",
                  ItemKind(kind).value, subtype, raw_x, raw_y, x, y)
    return SnapResult(x, y, guides)
