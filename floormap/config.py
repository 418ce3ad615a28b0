"""Shared tunables for the floor-plan layout engine.

The placement validator, the snap engine and the viewport all read their
thresholds from the singletons defined here, so a change in one place keeps
every stage consistent.  All distances are in grid cells unless the name
says otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SnapRules:
    """Search radii and penalties for the snapping heuristics."""

    wall_hug_radius: int = 1
    """Largest Manhattan adjustment the wall-hug stage may apply."""

    alignment_radius: int = 1
    """Largest per-axis correction the alignment stage may apply."""

    wall_offset_radius: int = 2
    """How far the wall-offset stage looks for a nearby wall."""

    wall_offset_clearance: int = 1
    """Gap (in cells) kept between general furniture and a wall."""

    endpoint_radius: float = 1.5
    """Euclidean reach for endpoint, line and corner targets when
    dragging a wall segment.  Covers the diagonal neighbour cell."""

    parallel_radius: float = 2.0
    """Looser reach for parallel alignment with another wall."""

    parallel_penalty: float = 0.05
    """Added to a parallel candidate's distance so exact endpoint
    matches win ties."""


@dataclass(frozen=True)
class ViewportRules:
    """Zoom limits and fit parameters for one viewport mode."""

    zoom_min: float
    zoom_max: float
    fit_max_zoom: float
    inset_px: float
    cell_px: float = 60.0
    zoom_step: float = 1.1

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.zoom_min, min(self.zoom_max, zoom))


@dataclass(frozen=True)
class ItemLimits:
    """Normalization bounds for presentational item attributes."""

    scale_min: float = 0.5
    scale_max: float = 1.6
    rotation_step: int = 45


# Module-level singletons, importable everywhere.
SNAP_RULES = SnapRules()
ITEM_LIMITS = ItemLimits()

# The editor never lets the map shrink below ~a third of its size and
# never auto-zooms past 1.2×.  The read-only live view may shrink as far
# as needed to show the whole floor but never auto-zooms in.
EDIT_VIEWPORT = ViewportRules(zoom_min=0.35, zoom_max=2.5, fit_max_zoom=1.2, inset_px=20)
VIEW_VIEWPORT = ViewportRules(zoom_min=0.01, zoom_max=2.5, fit_max_zoom=1.0, inset_px=12)
