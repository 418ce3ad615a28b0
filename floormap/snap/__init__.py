"""Snap engine — nudges a dragged item toward meaningful targets.

Submodules:
  models      SnapResult, Guides and per-item snap profiles.
  heuristics  Wall hug, alignment, wall offset and segment snapping.
  engine      compute_snap, which composes the heuristics.
"""

from .models import Guides, SnapResult, SnapProfile, snap_profile
from .engine import compute_snap

__all__ = [
    # Models
    "Guides", "SnapResult", "SnapProfile", "snap_profile",
    # Engine
    "compute_snap",
]
