"""Viewport transform — pan/zoom state and screen ↔ grid conversion.

A ``Viewport`` maps grid cells to viewport pixels:

    screen = pan + cell * cell_px * zoom

The editor and the read-only live view use the same transform with
different limits (``EDIT_VIEWPORT`` / ``VIEW_VIEWPORT``).  All methods
return a new ``Viewport``; none of them mutate.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from floormap.config import EDIT_VIEWPORT, ViewportRules
from floormap.layout.models import Bounds


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    cell_px: float = EDIT_VIEWPORT.cell_px

    # ── Screen ↔ grid ──────────────────────────────────────────────

    def point_to_cell(
        self, vx: float, vy: float, cols: int, rows: int,
    ) -> tuple[int, int] | None:
        """Grid cell under a viewport point, or None when off the grid."""
        if self.zoom <= 0:
            return None
        gx = math.floor(((vx - self.pan_x) / self.zoom) / self.cell_px)
        gy = math.floor(((vy - self.pan_y) / self.zoom) / self.cell_px)
        if gx < 0 or gy < 0 or gx >= cols or gy >= rows:
            return None
        return (gx, gy)

    def cell_to_point(self, x: float, y: float) -> tuple[float, float]:
        """Viewport position of a cell's top-left corner."""
        step = self.cell_px * self.zoom
        return (self.pan_x + x * step, self.pan_y + y * step)

    def cell_center_to_point(self, x: float, y: float) -> tuple[float, float]:
        return self.cell_to_point(x + 0.5, y + 0.5)

    # ── Zoom and pan ───────────────────────────────────────────────

    def zoom_at_point(
        self,
        new_zoom: float,
        anchor_x: float, anchor_y: float,
        rules: ViewportRules = EDIT_VIEWPORT,
    ) -> Viewport:
        """Zoom so the content under the anchor stays under the anchor."""
        clamped = rules.clamp_zoom(new_zoom)
        if self.zoom <= 0:
            return replace(self, zoom=clamped)
        ratio = clamped / self.zoom
        return replace(
            self,
            zoom=clamped,
            pan_x=anchor_x - (anchor_x - self.pan_x) * ratio,
            pan_y=anchor_y - (anchor_y - self.pan_y) * ratio,
        )

    def zoom_step(
        self,
        direction: int,
        anchor_x: float, anchor_y: float,
        rules: ViewportRules = EDIT_VIEWPORT,
    ) -> Viewport:
        """One wheel notch: ``direction > 0`` zooms in, ``< 0`` out."""
        if direction == 0:
            return self
        factor = rules.zoom_step if direction > 0 else 2.0 - rules.zoom_step
        return self.zoom_at_point(self.zoom * factor, anchor_x, anchor_y, rules)

    def pan_by(self, dx: float, dy: float) -> Viewport:
        return replace(self, pan_x=self.pan_x + dx, pan_y=self.pan_y + dy)


# ── Fit to content ─────────────────────────────────────────────────


def fit_to_content(
    bounds: Bounds,
    viewport_w: float,
    viewport_h: float,
    rules: ViewportRules = EDIT_VIEWPORT,
    inset: float | None = None,
) -> Viewport:
    """Center *bounds* in the viewport at the largest zoom that fits.

    The zoom never exceeds ``rules.fit_max_zoom`` (fitting does not blow a
    small floor up) and is clamped to the mode's zoom range.  A viewport
    smaller than twice the inset still yields a positive zoom.
    """
    inset = rules.inset_px if inset is None else inset
    cell = rules.cell_px

    avail_w = max(1.0, viewport_w - inset * 2)
    avail_h = max(1.0, viewport_h - inset * 2)
    content_w = (bounds.max_x - bounds.min_x + 1) * cell
    content_h = (bounds.max_y - bounds.min_y + 1) * cell

    zoom = rules.clamp_zoom(min(avail_w / content_w, avail_h / content_h, rules.fit_max_zoom))

    pan_x = inset + (avail_w - content_w * zoom) / 2 - bounds.min_x * cell * zoom
    pan_y = inset + (avail_h - content_h * zoom) / 2 - bounds.min_y * cell * zoom

    log.info("Fit %d×%d cells into %.0f×%.0f px: zoom %.3f, pan (%.1f, %.1f)",
             bounds.width, bounds.height, viewport_w, viewport_h, zoom, pan_x, pan_y)
    return Viewport(zoom=zoom, pan_x=pan_x, pan_y=pan_y, cell_px=cell)
