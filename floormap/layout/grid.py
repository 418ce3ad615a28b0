"""Grid queries — cell activity, occupied bounds and mask editing helpers.

The mask is the restaurant's physical shape inside its rectangular grid.
A mask that is missing or shorter than ``rows * cols`` is read as if the
missing tail were all 1 (usable), so layouts saved before shape editing
existed stay fully active.
"""

from __future__ import annotations

from .models import Bounds, GridLayout


def mask_index(layout: GridLayout, x: int, y: int) -> int:
    return y * layout.cols + x


def in_bounds(layout: GridLayout, x: int, y: int) -> bool:
    return 0 <= x < layout.cols and 0 <= y < layout.rows


def is_cell_active(layout: GridLayout, x: int, y: int) -> bool:
    """True when ``(x, y)`` is inside the grid and its mask flag is 1."""
    if not in_bounds(layout, x, y):
        return False
    idx = mask_index(layout, x, y)
    if idx >= len(layout.mask):
        return True
    return layout.mask[idx] == 1


def full_bounds(layout: GridLayout) -> Bounds:
    return Bounds(0, 0, max(0, layout.cols - 1), max(0, layout.rows - 1))


def compute_occupied_bounds(layout: GridLayout) -> Bounds:
    """Bounding box used by "fit to screen" in the editor.

    With a shaped mask this is the tight box around active cells, otherwise
    the whole grid.  The box always grows to cover every placed item so
    nothing already in the layout is cropped, then is clamped back into
    the grid.
    """
    min_x = min_y = max_x = max_y = None

    shaped = any(
        not is_cell_active(layout, x, y)
        for y in range(layout.rows)
        for x in range(layout.cols)
    )
    if shaped:
        for y in range(layout.rows):
            for x in range(layout.cols):
                if not is_cell_active(layout, x, y):
                    continue
                min_x = x if min_x is None else min(min_x, x)
                min_y = y if min_y is None else min(min_y, y)
                max_x = x if max_x is None else max(max_x, x)
                max_y = y if max_y is None else max(max_y, y)
    else:
        full = full_bounds(layout)
        min_x, min_y, max_x, max_y = full.min_x, full.min_y, full.max_x, full.max_y

    for item in layout.items():
        r = item.rect
        min_x = r.x if min_x is None else min(min_x, r.x)
        min_y = r.y if min_y is None else min(min_y, r.y)
        max_x = r.right - 1 if max_x is None else max(max_x, r.right - 1)
        max_y = r.bottom - 1 if max_y is None else max(max_y, r.bottom - 1)

    # Fully inactive mask and nothing placed: show the whole grid.
    if min_x is None:
        return full_bounds(layout)

    return _clamp_bounds(layout, min_x, min_y, max_x, max_y)


def compute_content_bounds(layout: GridLayout, pad_cells: int = 1) -> Bounds:
    """Bounds of placed content plus a margin, for the read-only live view.

    The mask often spans the full width and would keep the map biased to
    one side, so only tables and objects are considered.  An empty layout
    falls back to the full grid.
    """
    cols, rows = layout.cols, layout.rows
    items = layout.items()
    if not items:
        return full_bounds(layout)

    min_x = min_y = 10 ** 9
    max_x = max_y = -(10 ** 9)
    for item in items:
        x = _clamp(item.origin_x, 0, cols - 1)
        y = _clamp(item.origin_y, 0, rows - 1)
        span_x = _clamp(item.span_x, 1, cols)
        span_y = _clamp(item.span_y, 1, rows)
        min_x = min(min_x, x)
        min_y = min(min_y, y)
        max_x = max(max_x, x + span_x - 1)
        max_y = max(max_y, y + span_y - 1)

    return _clamp_bounds(
        layout,
        min_x - pad_cells, min_y - pad_cells,
        max_x + pad_cells, max_y + pad_cells,
    )


# ── Mask editing ───────────────────────────────────────────────────


def filled_mask(rows: int, cols: int) -> list[int]:
    return [1] * max(0, rows * cols)


def with_cell(layout: GridLayout, x: int, y: int, active: bool) -> list[int]:
    """Return a copy of the (padded) mask with one cell changed."""
    mask = padded_mask(layout)
    mask[mask_index(layout, x, y)] = 1 if active else 0
    return mask


def inverted(layout: GridLayout) -> list[int]:
    return [0 if v == 1 else 1 for v in padded_mask(layout)]


def padded_mask(layout: GridLayout) -> list[int]:
    """Mask trimmed or padded with 1 to exactly ``rows * cols`` entries."""
    size = max(0, layout.rows * layout.cols)
    base = [1 if v == 1 else 0 for v in layout.mask[:size]]
    base.extend([1] * (size - len(base)))
    return base


# ── Internals ──────────────────────────────────────────────────────


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def _clamp_bounds(
    layout: GridLayout, min_x: int, min_y: int, max_x: int, max_y: int,
) -> Bounds:
    hi_x = max(0, layout.cols - 1)
    hi_y = max(0, layout.rows - 1)
    return Bounds(
        _clamp(min_x, 0, hi_x),
        _clamp(min_y, 0, hi_y),
        _clamp(max_x, 0, hi_x),
        _clamp(max_y, 0, hi_y),
    )
