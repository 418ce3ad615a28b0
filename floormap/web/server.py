"""
FastAPI web server — stateless JSON API over the layout engine.

Every request carries the full layout document; every edit responds with
the resulting document.  Placement conflicts are ordinary 200 responses
with ``accepted: false``; only unusable documents (422) and unknown item
ids (404) are HTTP errors.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from floormap.config import EDIT_VIEWPORT, VIEW_VIEWPORT
from floormap.editor.operations import (
    DragPayload, EditResult,
    drop_item, move_item, resize_item, rotate_item, set_rotation,
    scale_item, delete_item, paint_cell, reset_mask, invert_mask,
)
from floormap.layout.grid import compute_occupied_bounds, compute_content_bounds
from floormap.layout.models import (
    GridLayout, Table, ItemKind, TableShape, ObjectKind, Bounds,
    LayoutError, LayoutParseError, UnknownItemError,
)
from floormap.layout.parsing import parse_layout
from floormap.layout.serialization import layout_to_dict, table_to_dict, object_to_dict
from floormap.layout.validation import validate_layout
from floormap.placer.validator import validate_placement
from floormap.snap.engine import compute_snap
from floormap.snap.models import Guides
from floormap.viewport.transform import Viewport, fit_to_content
from floormap.walls.connectivity import junctions, open_ends


log = logging.getLogger(__name__)


# ── .env loader ────────────────────────────────────────────────────

def _load_env():
    root = Path(__file__).resolve().parents[2]
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()


def _cors_origins() -> list[str]:
    raw = os.environ.get("FLOORMAP_CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Floormap")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ─────────────────────────────────────────────────────────

class LayoutRequest(BaseModel):
    layout: dict[str, Any]


class SnapRequest(LayoutRequest):
    x: int
    y: int
    span_x: int = 1
    span_y: int = 1
    kind: Literal["table", "object"]
    subtype: str | None = None
    disable_snap: bool = False
    exclude_id: str | None = None


class DropRequest(LayoutRequest):
    x: int
    y: int
    kind: Literal["table", "object"]
    mode: Literal["new", "existing"] = "new"
    shape: str | None = None
    object_type: str | None = None
    seats: int | None = None
    span_x: int | None = None
    span_y: int | None = None
    rotation: int | None = None
    label: str | None = None
    visual_only: bool = False
    asset_ref: str | None = None
    section_id: str | None = None
    existing_id: str | None = None
    disable_snap: bool = False


class MoveRequest(LayoutRequest):
    item_id: str
    x: int
    y: int
    disable_snap: bool = False


class ResizeRequest(LayoutRequest):
    item_id: str
    span_x: int
    span_y: int


class RotateRequest(LayoutRequest):
    item_id: str
    delta_deg: int | None = None     # relative turn (±45 from the buttons)
    rotation_deg: int | None = None  # absolute angle


class ScaleRequest(LayoutRequest):
    item_id: str
    scale: float


class DeleteRequest(LayoutRequest):
    item_id: str


class MaskRequest(LayoutRequest):
    action: Literal["paint", "reset", "invert"] = "paint"
    x: int = 0
    y: int = 0
    active: bool = True


class ViewportState(BaseModel):
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    mode: Literal["edit", "view"] = "edit"


class FitRequest(LayoutRequest):
    viewport_w: float
    viewport_h: float
    mode: Literal["edit", "view"] = "edit"


class PointToCellRequest(ViewportState):
    x: float
    y: float
    cols: int
    rows: int


class ZoomRequest(ViewportState):
    anchor_x: float
    anchor_y: float
    direction: int | None = None     # wheel notch: >0 in, <0 out
    new_zoom: float | None = None    # explicit target zoom


# ── Helpers ────────────────────────────────────────────────────────

def _parse(doc: dict[str, Any]) -> GridLayout:
    try:
        return parse_layout(doc)
    except LayoutParseError as e:
        raise HTTPException(422, str(e))


def _rules(mode: str):
    return VIEW_VIEWPORT if mode == "view" else EDIT_VIEWPORT


def _guides_to_dict(guides: Guides | None) -> dict:
    guides = guides or Guides()
    return {"v": list(guides.v), "h": list(guides.h)}


def _bounds_to_dict(b: Bounds) -> dict:
    return {"minX": b.min_x, "minY": b.min_y, "maxX": b.max_x, "maxY": b.max_y}


def _viewport_to_dict(vp: Viewport) -> dict:
    return {"zoom": vp.zoom, "pan_x": vp.pan_x, "pan_y": vp.pan_y}


def _edit_response(result: EditResult) -> dict:
    outcome = result.outcome
    item = None
    if result.item is not None:
        item = table_to_dict(result.item) if isinstance(result.item, Table) else object_to_dict(result.item)
    return {
        "accepted": outcome.accepted,
        "reason": None if outcome.accepted else outcome.reason.value,
        "item": item,
        "guides": _guides_to_dict(result.guides),
        "layout": layout_to_dict(result.layout),
    }


def _run_edit(fn, *args, **kwargs) -> dict:
    try:
        return _edit_response(fn(*args, **kwargs))
    except UnknownItemError as e:
        raise HTTPException(404, str(e))
    except (LayoutError, ValueError) as e:
        raise HTTPException(422, str(e))


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/layout/normalize")
def normalize_layout(req: LayoutRequest):
    """Parse and re-serialize a document, applying every load-time repair."""
    return layout_to_dict(_parse(req.layout))


@app.post("/api/validate")
def validate(req: LayoutRequest):
    problems = validate_layout(_parse(req.layout))
    return {"valid": not problems, "problems": problems}


@app.post("/api/snap")
def snap(req: SnapRequest):
    """Snap a hovering item and report whether it could be dropped there.

    Used for the drag preview: the UI draws the item at the returned cell,
    renders the guides, and tints the preview when ``accepted`` is false.
    """
    layout = _parse(req.layout)
    result = compute_snap(
        layout, req.x, req.y, req.span_x, req.span_y,
        ItemKind(req.kind), req.subtype,
        disable_snap=req.disable_snap, exclude_id=req.exclude_id,
    )
    participates = True
    if req.exclude_id:
        moving = layout.find(req.exclude_id)
        if moving is not None:
            participates = moving.participates_in_collision
    outcome = validate_placement(
        layout, result.x, result.y, max(1, req.span_x), max(1, req.span_y),
        ignore_id=req.exclude_id, participates=participates,
    )
    return {
        "x": result.x,
        "y": result.y,
        "guides": _guides_to_dict(result.guides),
        "accepted": outcome.accepted,
        "reason": None if outcome.accepted else outcome.reason.value,
    }


@app.post("/api/edit/drop")
def edit_drop(req: DropRequest):
    layout = _parse(req.layout)
    try:
        payload = DragPayload(
            kind=ItemKind(req.kind),
            mode=req.mode,
            shape=TableShape(req.shape.lower()) if req.shape else None,
            object_kind=ObjectKind(req.object_type.lower()) if req.object_type else None,
            seats=req.seats,
            span_x=req.span_x,
            span_y=req.span_y,
            rotation=req.rotation,
            label=req.label,
            visual_only=req.visual_only,
            asset_ref=req.asset_ref,
            section_id=req.section_id,
            existing_id=req.existing_id,
        )
    except ValueError as e:
        raise HTTPException(422, str(e))
    return _run_edit(drop_item, layout, payload, req.x, req.y, disable_snap=req.disable_snap)


@app.post("/api/edit/move")
def edit_move(req: MoveRequest):
    return _run_edit(move_item, _parse(req.layout), req.item_id, req.x, req.y,
                     disable_snap=req.disable_snap)


@app.post("/api/edit/resize")
def edit_resize(req: ResizeRequest):
    return _run_edit(resize_item, _parse(req.layout), req.item_id, req.span_x, req.span_y)


@app.post("/api/edit/rotate")
def edit_rotate(req: RotateRequest):
    layout = _parse(req.layout)
    if req.rotation_deg is not None:
        return _run_edit(set_rotation, layout, req.item_id, req.rotation_deg)
    if req.delta_deg is None:
        raise HTTPException(422, "Either delta_deg or rotation_deg is required.")
    return _run_edit(rotate_item, layout, req.item_id, req.delta_deg)


@app.post("/api/edit/scale")
def edit_scale(req: ScaleRequest):
    return _run_edit(scale_item, _parse(req.layout), req.item_id, req.scale)


@app.post("/api/edit/delete")
def edit_delete(req: DeleteRequest):
    return _run_edit(delete_item, _parse(req.layout), req.item_id)


@app.post("/api/mask/paint")
def mask_paint(req: MaskRequest):
    layout = _parse(req.layout)
    if req.action == "reset":
        return _run_edit(reset_mask, layout)
    if req.action == "invert":
        return _run_edit(invert_mask, layout)
    return _run_edit(paint_cell, layout, req.x, req.y, req.active)


@app.post("/api/walls/junctions")
def wall_junctions(req: LayoutRequest):
    layout = _parse(req.layout)
    return {
        "junctions": [
            {
                "x": j.x,
                "y": j.y,
                "kind": j.kind.value,
                "directions": sorted(d.value for d in j.directions),
            }
            for j in junctions(layout)
        ],
        "open_ends": [list(p) for p in open_ends(layout)],
    }


@app.post("/api/viewport/fit")
def viewport_fit(req: FitRequest):
    """Fit the floor into the viewport.

    The editor fits the occupied area (mask shape plus items); the live
    view fits placed content with a one-cell margin.
    """
    layout = _parse(req.layout)
    if req.mode == "view":
        bounds = compute_content_bounds(layout)
    else:
        bounds = compute_occupied_bounds(layout)
    vp = fit_to_content(bounds, req.viewport_w, req.viewport_h, _rules(req.mode))
    return {**_viewport_to_dict(vp), "bounds": _bounds_to_dict(bounds)}


@app.post("/api/viewport/point-to-cell")
def viewport_point_to_cell(req: PointToCellRequest):
    vp = Viewport(zoom=req.zoom, pan_x=req.pan_x, pan_y=req.pan_y,
                  cell_px=_rules(req.mode).cell_px)
    cell = vp.point_to_cell(req.x, req.y, req.cols, req.rows)
    return {"cell": list(cell) if cell is not None else None}


@app.post("/api/viewport/zoom")
def viewport_zoom(req: ZoomRequest):
    rules = _rules(req.mode)
    vp = Viewport(zoom=req.zoom, pan_x=req.pan_x, pan_y=req.pan_y, cell_px=rules.cell_px)
    if req.new_zoom is not None:
        vp = vp.zoom_at_point(req.new_zoom, req.anchor_x, req.anchor_y, rules)
    elif req.direction is not None:
        vp = vp.zoom_step(req.direction, req.anchor_x, req.anchor_y, rules)
    else:
        raise HTTPException(422, "Either direction or new_zoom is required.")
    return _viewport_to_dict(vp)


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    log.info("Serving floormap API on http://%s:%d", host, port)
    uvicorn.run("floormap.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
