"""Wall connectivity — segments, endpoints and junctions.

Submodules:
  models        WallSegment, WallJoint, Direction, JunctionKind.
  connectivity  Endpoint map, junction classification, segment queries.
"""

from .models import Direction, JunctionKind, WallSegment, WallJoint
from .connectivity import (
    wall_segments, build_endpoint_map, is_junction, classify, junctions,
    open_ends, collinear_overlap,
)

__all__ = [
    # Models
    "Direction", "JunctionKind", "WallSegment", "WallJoint",
    # Connectivity
    "wall_segments", "build_endpoint_map", "is_junction", "classify",
    "junctions", "open_ends", "collinear_overlap",
]
