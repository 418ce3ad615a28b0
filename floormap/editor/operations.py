"""Editing operations — the only way a layout changes.

Every operation is a pure function ``(layout, args) -> EditResult``.  The
input layout is never mutated: an accepted edit returns a new layout
built with ``dataclasses.replace``; a rejected edit returns the input
layout itself together with the ``Rejected`` outcome, so the caller can
surface the reason and keep its prior state.

Every item edit (drop, move, resize, rotate, scale) goes through
``validate_placement``; mask painting uses the equivalent mask check.
Rotation and scale never change the footprint, so they are re-checked
in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from floormap.config import SNAP_RULES, SnapRules
from floormap.layout.grid import (
    in_bounds, inverted, filled_mask, with_cell, mask_index,
)
from floormap.layout.models import (
    GridLayout, Table, FurnitureObject, PlacedItem,
    ItemKind, TableShape, ObjectKind, LayoutError,
)
from floormap.layout.parsing import (
    fresh_item_id, normalize_rotation, normalize_scale, normalize_seats,
    normalize_span,
)
from floormap.placer.models import Accepted, Rejected, RejectReason, PlacementResult
from floormap.placer.validator import clamp_to_grid, validate_placement
from floormap.snap.engine import compute_snap
from floormap.snap.models import Guides

from .defaults import (
    default_seats, default_table_span, object_defaults, next_table_number,
)


log = logging.getLogger(__name__)


# ── Payloads and results ───────────────────────────────────────────


@dataclass
class DragPayload:
    """What the pointer is carrying during a drag gesture.

    ``mode="new"`` drags come from the palette and describe the item to
    create; ``mode="existing"`` drags name the item being moved.
    """

    kind: ItemKind
    mode: str = "new"
    shape: TableShape | None = None
    object_kind: ObjectKind | None = None
    seats: int | None = None
    span_x: int | None = None
    span_y: int | None = None
    rotation: int | None = None
    label: str | None = None
    visual_only: bool = False
    asset_ref: str | None = None
    section_id: str | None = None
    existing_id: str | None = None


@dataclass(frozen=True)
class EditResult:
    layout: GridLayout
    outcome: PlacementResult
    item: PlacedItem | None = None
    guides: Guides | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted


def _replace_item(layout: GridLayout, updated: PlacedItem) -> GridLayout:
    if isinstance(updated, Table):
        return replace(layout, tables=[updated if t.id == updated.id else t for t in layout.tables])
    return replace(layout, objects=[updated if o.id == updated.id else o for o in layout.objects])


def _rejected(layout: GridLayout, outcome: Rejected, what: str, item: PlacedItem | None = None,
              guides: Guides | None = None) -> EditResult:
    log.info("%s rejected: %s", what, outcome.reason.value)
    return EditResult(layout, outcome, item, guides)


# ── Drop / move ────────────────────────────────────────────────────


def drop_item(
    layout: GridLayout,
    payload: DragPayload,
    cell_x: int, cell_y: int,
    *,
    disable_snap: bool = False,
    rules: SnapRules = SNAP_RULES,
) -> EditResult:
    """Finish a drag at grid cell ``(cell_x, cell_y)``.

    New tables get a default span from their shape and seat count, the
    next free ``T<n>`` id and the next table number.  New objects get the
    per-kind span and label defaults and an ``O<n>`` id.  An explicit span
    in the payload overrides the defaults.
    """
    if payload.mode == "existing":
        if not payload.existing_id:
            raise LayoutError("Existing-item drag carries no item id")
        return move_item(layout, payload.existing_id, cell_x, cell_y,
                         disable_snap=disable_snap, rules=rules)
    if payload.mode != "new":
        raise LayoutError(f"Unknown drag mode '{payload.mode}'")

    if ItemKind(payload.kind) is ItemKind.TABLE:
        return _drop_table(layout, payload, cell_x, cell_y, disable_snap, rules)
    return _drop_object(layout, payload, cell_x, cell_y, disable_snap, rules)


def _drop_table(
    layout: GridLayout, payload: DragPayload,
    cell_x: int, cell_y: int, disable_snap: bool, rules: SnapRules,
) -> EditResult:
    shape = TableShape(payload.shape or TableShape.SQUARE)
    seats = normalize_seats(payload.seats, default_seats(shape))
    span_x, span_y = default_table_span(shape, seats)
    if payload.span_x is not None:
        span_x = normalize_span(payload.span_x)
    if payload.span_y is not None:
        span_y = normalize_span(payload.span_y)

    snap = compute_snap(layout, cell_x, cell_y, span_x, span_y,
                        ItemKind.TABLE, shape.value,
                        disable_snap=disable_snap, rules=rules)
    outcome = validate_placement(layout, snap.x, snap.y, span_x, span_y)
    if not outcome.accepted:
        return _rejected(layout, outcome, f"New {shape.value} table", guides=snap.guides)

    number = next_table_number(layout)
    table = Table(
        id=fresh_item_id("T", layout.item_ids()),
        origin_x=outcome.x,
        origin_y=outcome.y,
        span_x=span_x,
        span_y=span_y,
        seat_count=seats,
        shape=shape,
        table_number=number,
        name=f"Table {number}",
        asset_ref=payload.asset_ref,
        section_id=payload.section_id,
    )
    log.info("Placed %s table %s at (%d, %d), %d×%d, %d seats",
             shape.value, table.id, table.origin_x, table.origin_y,
             span_x, span_y, seats)
    return EditResult(replace(layout, tables=[*layout.tables, table]), outcome, table, snap.guides)


def _drop_object(
    layout: GridLayout, payload: DragPayload,
    cell_x: int, cell_y: int, disable_snap: bool, rules: SnapRules,
) -> EditResult:
    object_kind = ObjectKind(payload.object_kind or ObjectKind.VISUAL)
    defaults = object_defaults(object_kind)
    span_x = normalize_span(payload.span_x if payload.span_x is not None else defaults.span_x)
    span_y = normalize_span(payload.span_y if payload.span_y is not None else defaults.span_y)

    snap = compute_snap(layout, cell_x, cell_y, span_x, span_y,
                        ItemKind.OBJECT, object_kind.value,
                        disable_snap=disable_snap, rules=rules)
    outcome = validate_placement(layout, snap.x, snap.y, span_x, span_y,
                                 participates=not payload.visual_only)
    if not outcome.accepted:
        return _rejected(layout, outcome, f"New {object_kind.value}", guides=snap.guides)

    obj = FurnitureObject(
        id=fresh_item_id("O", layout.item_ids()),
        origin_x=outcome.x,
        origin_y=outcome.y,
        span_x=span_x,
        span_y=span_y,
        object_kind=object_kind,
        label=payload.label if payload.label is not None else defaults.label,
        visual_only=payload.visual_only,
        rotation_deg=normalize_rotation(payload.rotation),
        asset_ref=payload.asset_ref,
    )
    log.info("Placed %s %s at (%d, %d), %d×%d",
             object_kind.value, obj.id, obj.origin_x, obj.origin_y, span_x, span_y)
    return EditResult(replace(layout, objects=[*layout.objects, obj]), outcome, obj, snap.guides)


def move_item(
    layout: GridLayout,
    item_id: str,
    raw_x: int, raw_y: int,
    *,
    disable_snap: bool = False,
    rules: SnapRules = SNAP_RULES,
) -> EditResult:
    """Drag an existing item to a new cell, snapping and re-validating."""
    item = layout.get(item_id)
    snap = compute_snap(layout, raw_x, raw_y, item.span_x, item.span_y,
                        item.kind, item.subtype,
                        disable_snap=disable_snap, exclude_id=item.id, rules=rules)
    outcome = validate_placement(layout, snap.x, snap.y, item.span_x, item.span_y,
                                 ignore_id=item.id,
                                 participates=item.participates_in_collision)
    if not outcome.accepted:
        return _rejected(layout, outcome, f"Move of {item.id}", item, snap.guides)

    moved = replace(item, origin_x=outcome.x, origin_y=outcome.y)
    log.info("Moved %s from (%d, %d) to (%d, %d)",
             item.id, item.origin_x, item.origin_y, moved.origin_x, moved.origin_y)
    return EditResult(_replace_item(layout, moved), outcome, moved, snap.guides)


# ── Resize / rotate / scale / delete ───────────────────────────────


def resize_item(layout: GridLayout, item_id: str, span_x: int, span_y: int) -> EditResult:
    """Change an item's footprint, keeping its origin where the grid allows."""
    item = layout.get(item_id)
    span_x = normalize_span(span_x)
    span_y = normalize_span(span_y)
    x, y = clamp_to_grid(item.origin_x, item.origin_y, span_x, span_y, layout.cols, layout.rows)
    outcome = validate_placement(layout, x, y, span_x, span_y,
                                 ignore_id=item.id,
                                 participates=item.participates_in_collision)
    if not outcome.accepted:
        return _rejected(layout, outcome, f"Resize of {item.id}", item)

    resized = replace(item, origin_x=outcome.x, origin_y=outcome.y, span_x=span_x, span_y=span_y)
    log.info("Resized %s to %d×%d at (%d, %d)", item.id, span_x, span_y, outcome.x, outcome.y)
    return EditResult(_replace_item(layout, resized), outcome, resized)


def _revalidated_in_place(layout: GridLayout, item: PlacedItem, updated: PlacedItem,
                          what: str) -> EditResult:
    """Re-check an item's unchanged footprint before committing a restyle."""
    outcome = validate_placement(layout, item.origin_x, item.origin_y, item.span_x, item.span_y,
                                 ignore_id=item.id,
                                 participates=item.participates_in_collision)
    if not outcome.accepted:
        return _rejected(layout, outcome, f"{what} of {item.id}", item)
    return EditResult(_replace_item(layout, updated), outcome, updated)


def set_rotation(layout: GridLayout, item_id: str, rotation_deg: int) -> EditResult:
    item = layout.get(item_id)
    rotated = replace(item, rotation_deg=normalize_rotation(rotation_deg))
    return _revalidated_in_place(layout, item, rotated, "Rotation")


def rotate_item(layout: GridLayout, item_id: str, delta_deg: int) -> EditResult:
    """Turn an item by ``delta_deg`` (the rotate buttons send ±45)."""
    item = layout.get(item_id)
    return set_rotation(layout, item_id, item.rotation_deg + delta_deg)


def scale_item(layout: GridLayout, item_id: str, scale: float) -> EditResult:
    item = layout.get(item_id)
    scaled = replace(item, scale=normalize_scale(scale, fallback=item.scale))
    return _revalidated_in_place(layout, item, scaled, "Scale")


def delete_item(layout: GridLayout, item_id: str) -> EditResult:
    item = layout.get(item_id)
    updated = replace(
        layout,
        tables=[t for t in layout.tables if t.id != item_id],
        objects=[o for o in layout.objects if o.id != item_id],
    )
    log.info("Deleted %s %s", item.kind.value, item.id)
    return EditResult(updated, Accepted(item.origin_x, item.origin_y), item)


# ── Shape mode (mask editing) ──────────────────────────────────────


def _blocked_cells(layout: GridLayout) -> set[int]:
    """Mask indices covered by collision-participating items."""
    cells: set[int] = set()
    for item in layout.items():
        if not item.participates_in_collision:
            continue
        for cx, cy in item.rect.cells():
            if in_bounds(layout, cx, cy):
                cells.add(mask_index(layout, cx, cy))
    return cells


def paint_cell(layout: GridLayout, x: int, y: int, active: bool) -> EditResult:
    """Activate or deactivate one cell of the restaurant shape.

    A cell under a blocking item cannot be deactivated (``occupied``);
    cells outside the grid are ``outside-shape``.
    """
    if not in_bounds(layout, x, y):
        return _rejected(layout, Rejected(RejectReason.OUTSIDE_SHAPE), f"Paint of ({x}, {y})")
    if not active and mask_index(layout, x, y) in _blocked_cells(layout):
        return _rejected(layout, Rejected(RejectReason.OCCUPIED), f"Paint of ({x}, {y})")
    return EditResult(replace(layout, mask=with_cell(layout, x, y, active)), Accepted(x, y))


def reset_mask(layout: GridLayout) -> EditResult:
    """Make every cell usable again."""
    return EditResult(replace(layout, mask=filled_mask(layout.rows, layout.cols)), Accepted(0, 0))


def invert_mask(layout: GridLayout) -> EditResult:
    """Swap usable and excluded cells, unless that would strand an item."""
    mask = inverted(layout)
    if any(mask[idx] == 0 for idx in _blocked_cells(layout)):
        return _rejected(layout, Rejected(RejectReason.OCCUPIED), "Mask inversion")
    return EditResult(replace(layout, mask=mask), Accepted(0, 0))
