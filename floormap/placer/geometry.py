"""Low-level integer geometry helpers shared by the validator and snapper."""

from __future__ import annotations

import math


def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def manhattan(ax: float, ay: float, bx: float, by: float) -> float:
    return abs(ax - bx) + abs(ay - by)


def euclidean(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(ax - bx, ay - by)


def interval_overlap(a0: float, a1: float, b0: float, b1: float) -> float:
    """Length shared by ``[a0, a1]`` and ``[b0, b1]``.

    Zero when the intervals only touch, negative when they are apart.
    """
    return min(max(a0, a1), max(b0, b1)) - max(min(a0, a1), min(b0, b1))


def spans_overlap(a0: int, a_len: int, b0: int, b_len: int) -> bool:
    """Strict overlap of the half-open ranges ``[a0, a0+a_len)`` and ``[b0, b0+b_len)``."""
    return interval_overlap(a0, a0 + a_len, b0, b0 + b_len) > 0
