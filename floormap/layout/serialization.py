"""Layout serialization — GridLayout back to the persisted document shape."""

from __future__ import annotations

from .models import GridLayout, Table, FurnitureObject


def table_to_dict(t: Table) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "tableNumber": t.table_number,
        "gridX": t.origin_x,
        "gridY": t.origin_y,
        "spanX": t.span_x,
        "spanY": t.span_y,
        "seats": t.seat_count,
        "shape": t.shape.value,
        "scale": t.scale,
        "rotationDeg": t.rotation_deg,
        "kind": "table",
        **({"assetFile": t.asset_ref} if t.asset_ref else {}),
        **({"sectionId": t.section_id} if t.section_id is not None else {}),
    }


def object_to_dict(o: FurnitureObject) -> dict:
    return {
        "id": o.id,
        "type": o.object_kind.value,
        "gridX": o.origin_x,
        "gridY": o.origin_y,
        "spanX": o.span_x,
        "spanY": o.span_y,
        "scale": o.scale,
        "rotationDeg": o.rotation_deg,
        "kind": "visualOnly" if o.visual_only else "object",
        **({"label": o.label} if o.label else {}),
        **({"assetFile": o.asset_ref} if o.asset_ref else {}),
    }


def layout_to_dict(layout: GridLayout) -> dict:
    """Serialize a GridLayout to a JSON-safe dict.

    Keys the engine does not interpret are written back unchanged.
    """
    return {
        **layout.extra,
        "id": layout.id,
        "restaurantId": layout.restaurant_id,
        "name": layout.name,
        "gridRows": layout.rows,
        "gridCols": layout.cols,
        "gridMask": list(layout.mask),
        "tables": [table_to_dict(t) for t in layout.tables],
        "objects": [object_to_dict(o) for o in layout.objects],
        "isActive": layout.is_active,
    }
