"""Layout validation — check a GridLayout against the placement invariants."""

from __future__ import annotations

from .grid import is_cell_active
from .models import GridLayout


def validate_layout(layout: GridLayout) -> list[str]:
    """Validate a layout. Returns error messages (empty = valid)."""
    errors: list[str] = []

    # ── Mask length ──
    expected = layout.rows * layout.cols
    if len(layout.mask) != expected:
        errors.append(
            f"Mask has {len(layout.mask)} entries, expected {expected} "
            f"({layout.rows}×{layout.cols})"
        )

    # ── Item ids must be unique ──
    seen_ids: set[str] = set()
    for item in layout.items():
        if item.id in seen_ids:
            errors.append(f"Duplicate item id '{item.id}'")
        seen_ids.add(item.id)

    # ── Every item inside the grid ──
    for item in layout.items():
        r = item.rect
        if r.x < 0 or r.y < 0 or r.right > layout.cols or r.bottom > layout.rows:
            errors.append(
                f"Item '{item.id}' at ({r.x}, {r.y}) span {r.w}×{r.h} "
                f"extends outside the {layout.cols}×{layout.rows} grid"
            )

    blocking = [i for i in layout.items() if i.participates_in_collision]

    # ── Blocking items only on active cells ──
    for item in blocking:
        dead = [c for c in item.rect.cells() if not is_cell_active(layout, *c)]
        if dead:
            errors.append(
                f"Item '{item.id}' covers {len(dead)} inactive cell(s), "
                f"first at {dead[0]}"
            )

    # ── No two blocking items overlap ──
    for i in range(len(blocking)):
        for j in range(i + 1, len(blocking)):
            a, b = blocking[i], blocking[j]
            if a.rect.overlaps(b.rect):
                errors.append(f"Items '{a.id}' and '{b.id}' overlap")

    return errors
