"""Placement outcomes — accepted positions and rejection reasons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class RejectReason(str, Enum):
    OUTSIDE_SHAPE = "outside-shape"     # covers an inactive mask cell
    COLLISION = "collision"             # overlaps another blocking item
    OCCUPIED = "occupied"               # mask edit under a blocking item


@dataclass(frozen=True)
class Accepted:
    """The placement is legal at ``(x, y)`` (already clamped to the grid)."""

    x: int
    y: int

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The placement conflicts with the mask or another item.

    Callers must leave the document unchanged.
    """

    reason: RejectReason

    @property
    def accepted(self) -> bool:
        return False


PlacementResult = Union[Accepted, Rejected]
