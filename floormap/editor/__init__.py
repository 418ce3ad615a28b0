"""Editor — palette defaults and the pure editing operations.

Submodules:
  defaults    Default spans, seat counts and labels for new items.
  operations  drop / move / resize / rotate / scale / delete, mask edits.
"""

from .defaults import default_table_span, default_seats, object_defaults, next_table_number
from .operations import (
    DragPayload, EditResult,
    drop_item, move_item, resize_item, rotate_item, set_rotation,
    scale_item, delete_item, paint_cell, reset_mask, invert_mask,
)

__all__ = [
    # Defaults
    "default_table_span", "default_seats", "object_defaults", "next_table_number",
    # Operations
    "DragPayload", "EditResult",
    "drop_item", "move_item", "resize_item", "rotate_item", "set_rotation",
    "scale_item", "delete_item", "paint_cell", "reset_mask", "invert_mask",
]
