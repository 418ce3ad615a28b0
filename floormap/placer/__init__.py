"""Placer — decides whether an item may sit at a given cell.

Submodules:
  models     Accepted / Rejected outcomes and rejection reasons.
  geometry   Small integer geometry helpers (clamp, distances, spans).
  validator  clamp_to_grid, mask_allows, collides, validate_placement.
"""

from .models import Accepted, Rejected, RejectReason, PlacementResult
from .validator import clamp_to_grid, mask_allows, collides, colliding_ids, validate_placement

__all__ = [
    # Models
    "Accepted", "Rejected", "RejectReason", "PlacementResult",
    # Validator
    "clamp_to_grid", "mask_allows", "collides", "colliding_ids", "validate_placement",
]
