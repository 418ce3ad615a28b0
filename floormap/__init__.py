"""Floormap — the floor-plan layout engine behind the restaurant editor.

Subpackages, in data-flow order:

  viewport  pointer pixels → grid cell (pan/zoom transform)
  snap      raw cell → adjusted cell + alignment guides
  placer    adjusted cell → accept / reject (clamp, mask, collision)
  editor    accepted edits → new layout documents
  walls     wall segments, endpoints and junction classification
  layout    the document model, parsing and serialization
  web       JSON API over all of the above
"""
