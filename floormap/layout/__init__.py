"""Layout documents — the grid, its items, and the document boundary.

Submodules:
  models         Dataclasses for the grid, tables, objects and errors.
  grid           Cell activity, occupied/content bounds, mask helpers.
  parsing        Raw document dict → GridLayout, with normalization.
  serialization  GridLayout → document dict.
  validation     Invariant checks over a whole layout.
"""

from .models import (
    ItemKind, TableShape, ObjectKind, Rect, Bounds,
    Table, FurnitureObject, PlacedItem, GridLayout,
    LayoutError, LayoutParseError, UnknownItemError,
)
from .grid import (
    is_cell_active, compute_occupied_bounds, compute_content_bounds,
)
from .parsing import parse_layout, ensure_mask, normalize_rotation, normalize_scale
from .serialization import layout_to_dict, table_to_dict, object_to_dict
from .validation import validate_layout

__all__ = [
    # Models
    "ItemKind", "TableShape", "ObjectKind", "Rect", "Bounds",
    "Table", "FurnitureObject", "PlacedItem", "GridLayout",
    "LayoutError", "LayoutParseError", "UnknownItemError",
    # Grid
    "is_cell_active", "compute_occupied_bounds", "compute_content_bounds",
    # Parsing
    "parse_layout", "ensure_mask", "normalize_rotation", "normalize_scale",
    # Serialization
    "layout_to_dict", "table_to_dict", "object_to_dict",
    # Validation
    "validate_layout",
]
