"""Layout parsing — convert a raw document dict into a GridLayout.

Every backward-compatible fallback lives here and is applied exactly once,
at the document boundary: a missing mask becomes all-active, missing
rotation becomes 0, missing scale becomes 1, and malformed numbers are
normalized instead of rejected.  Code past this point can trust the
dataclasses.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from floormap.config import ITEM_LIMITS

from .models import (
    GridLayout, Table, FurnitureObject, TableShape, ObjectKind,
    LayoutParseError,
)


log = logging.getLogger(__name__)

# Document keys interpreted by the engine; anything else goes to ``extra``.
_KNOWN_KEYS = {
    "id", "restaurantId", "name", "gridRows", "gridCols", "gridMask",
    "tables", "objects", "isActive",
}


# ── Scalar normalization ───────────────────────────────────────────


def _finite(v: Any) -> float | None:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def normalize_span(v: Any) -> int:
    """Span in cells, floored, never below 1."""
    f = _finite(v)
    if f is None:
        return 1
    return max(1, int(math.floor(f)))


def normalize_coord(v: Any) -> int:
    """Grid coordinate, floored, never negative."""
    f = _finite(v)
    if f is None:
        return 0
    return max(0, int(math.floor(f)))


def normalize_rotation(v: Any) -> int:
    """Snap to the nearest 45° step and wrap into ``[0, 360)``."""
    f = _finite(v)
    if f is None:
        return 0
    step = ITEM_LIMITS.rotation_step
    # Round half away from zero, as the editor's rotate buttons do.
    steps = math.floor(abs(f) / step + 0.5)
    snapped = int(math.copysign(steps * step, f))
    return snapped % 360


def normalize_scale(v: Any, fallback: float = 1.0) -> float:
    """Clamp a presentational scale factor into the allowed range."""
    f = _finite(v)
    if f is None:
        return fallback
    return max(ITEM_LIMITS.scale_min, min(ITEM_LIMITS.scale_max, f))


def normalize_seats(v: Any, fallback: int = 2) -> int:
    f = _finite(v)
    if f is None:
        return fallback
    return max(1, int(f))


def ensure_mask(raw: Any, rows: int, cols: int) -> list[int]:
    """Trim or pad a raw mask to ``rows * cols`` binary flags.

    Missing entries default to 1 (usable).  Any value other than 1 is
    read as inactive.
    """
    size = max(0, rows * cols)
    if raw is None:
        return [1] * size
    if not isinstance(raw, list):
        log.warning("gridMask is not a list (%s); treating grid as fully active",
                    type(raw).__name__)
        return [1] * size
    if len(raw) != size:
        log.warning("gridMask has %d entries, expected %d; %s",
                    len(raw), size,
                    "padding with active cells" if len(raw) < size else "truncating")
    base = [1 if _finite(v) == 1 else 0 for v in raw[:size]]
    base.extend([1] * (size - len(base)))
    return base


def fresh_item_id(prefix: str, taken: set[str]) -> str:
    """Return ``<prefix><n>`` for the smallest n ≥ 1 not already taken."""
    n = 1
    while f"{prefix}{n}" in taken:
        n += 1
    return f"{prefix}{n}"


# ── Document parsing ───────────────────────────────────────────────


def parse_layout(data: dict) -> GridLayout:
    """Parse a raw layout document (from JSON / the persistence layer)."""
    if not isinstance(data, dict):
        raise LayoutParseError("<document>", "expected a JSON object")

    rows = _parse_dimension(data, "gridRows")
    cols = _parse_dimension(data, "gridCols")

    raw_tables = data.get("tables") or []
    raw_objects = data.get("objects") or []
    if not isinstance(raw_tables, list):
        raise LayoutParseError("tables", "expected a list")
    if not isinstance(raw_objects, list):
        raise LayoutParseError("objects", "expected a list")

    taken: set[str] = set()
    tables = [_parse_table(t, taken) for t in raw_tables]
    objects = [_parse_object(o, taken) for o in raw_objects]

    return GridLayout(
        id=str(data.get("id") or ""),
        rows=rows,
        cols=cols,
        mask=ensure_mask(data.get("gridMask"), rows, cols),
        tables=tables,
        objects=objects,
        restaurant_id=str(data.get("restaurantId") or ""),
        name=str(data.get("name") or ""),
        is_active=bool(data.get("isActive", False)),
        extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
    )


def _parse_dimension(data: dict, key: str) -> int:
    if key not in data:
        raise LayoutParseError(key, "missing")
    f = _finite(data[key])
    if f is None or f < 1:
        raise LayoutParseError(key, f"expected a positive integer, got {data[key]!r}")
    return int(f)


def _claim_id(raw_id: Any, prefix: str, taken: set[str]) -> str:
    item_id = str(raw_id) if raw_id not in (None, "") else ""
    if not item_id or item_id in taken:
        fresh = fresh_item_id(prefix, taken)
        if item_id:
            log.warning("Duplicate item id '%s' renamed to '%s'", item_id, fresh)
        item_id = fresh
    taken.add(item_id)
    return item_id


def _parse_table(t: dict, taken: set[str]) -> Table:
    if not isinstance(t, dict):
        raise LayoutParseError("tables[]", "expected an object")

    raw_shape = str(t.get("shape") or "square").lower()
    try:
        shape = TableShape(raw_shape)
    except ValueError:
        log.warning("Unknown table shape '%s'; using 'square'", raw_shape)
        shape = TableShape.SQUARE

    number = int(_finite(t.get("tableNumber")) or 0)
    return Table(
        id=_claim_id(t.get("id"), "T", taken),
        origin_x=normalize_coord(t.get("gridX")),
        origin_y=normalize_coord(t.get("gridY")),
        span_x=normalize_span(t.get("spanX")),
        span_y=normalize_span(t.get("spanY")),
        seat_count=normalize_seats(t.get("seats")),
        shape=shape,
        table_number=number,
        name=str(t.get("name") or (f"Table {number}" if number else "")),
        rotation_deg=normalize_rotation(t.get("rotationDeg", t.get("rotation"))),
        scale=normalize_scale(t.get("scale")),
        asset_ref=t.get("assetFile") or None,
        section_id=(str(t["sectionId"]) if t.get("sectionId") is not None else None),
    )


def _parse_object(o: dict, taken: set[str]) -> FurnitureObject:
    if not isinstance(o, dict):
        raise LayoutParseError("objects[]", "expected an object")

    raw_type = str(o.get("type") or "visual").lower()
    try:
        object_kind = ObjectKind(raw_type)
    except ValueError:
        log.warning("Unknown object type '%s'; using 'visual'", raw_type)
        object_kind = ObjectKind.VISUAL

    # Legacy documents carry 0/90/180/270 in ``rotation``.
    rotation = o.get("rotationDeg")
    if rotation is None:
        rotation = o.get("rotation")

    return FurnitureObject(
        id=_claim_id(o.get("id"), "O", taken),
        origin_x=normalize_coord(o.get("gridX")),
        origin_y=normalize_coord(o.get("gridY")),
        span_x=normalize_span(o.get("spanX")),
        span_y=normalize_span(o.get("spanY")),
        object_kind=object_kind,
        label=o.get("label") or None,
        visual_only=(o.get("kind") == "visualOnly"),
        rotation_deg=normalize_rotation(rotation),
        scale=normalize_scale(o.get("scale")),
        asset_ref=o.get("assetFile") or None,
    )
