"""Viewport — pan/zoom state and pixel ↔ grid conversion."""

from .transform import Viewport, fit_to_content

__all__ = ["Viewport", "fit_to_content"]
