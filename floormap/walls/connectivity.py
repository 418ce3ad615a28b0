"""Wall connectivity — endpoint adjacency, junctions and segment tests.

Each wall endpoint is recorded with the cardinal directions in which wall
material leaves it.  A point with two or more directions is a junction:
the renderer draws a connector glyph there instead of an end cap, and the
snap engine treats it as a target.  Nothing here knows about pixels.
"""

from __future__ import annotations

from shapely.geometry import Point

from floormap.layout.models import GridLayout

from .models import Direction, JunctionKind, WallJoint, WallSegment


EndpointMap = dict[tuple[int, int], set[Direction]]


def wall_segments(layout: GridLayout, exclude_id: str | None = None) -> list[WallSegment]:
    """Segments for every collision-participating wall and divider."""
    return [
        WallSegment.from_rect(o.id, o.origin_x, o.origin_y, o.span_x, o.span_y)
        for o in layout.objects
        if o.is_wall_segment and o.id != exclude_id
    ]


def build_endpoint_map(layout: GridLayout) -> EndpointMap:
    """Map every wall endpoint to the directions its walls extend into.

    A horizontal wall contributes ``E`` at its start and ``W`` at its end;
    a vertical wall ``S`` at its start and ``N`` at its end.  An endpoint
    that lands inside another wall also picks up both directions of that
    wall, so a wall butting into the middle of another reads as a T.
    """
    segments = wall_segments(layout)
    endpoint_map: EndpointMap = {}

    for seg in segments:
        if seg.horizontal:
            endpoint_map.setdefault(seg.start, set()).add(Direction.E)
            endpoint_map.setdefault(seg.end, set()).add(Direction.W)
        else:
            endpoint_map.setdefault(seg.start, set()).add(Direction.S)
            endpoint_map.setdefault(seg.end, set()).add(Direction.N)

    for point in list(endpoint_map):
        for seg in segments:
            if seg.contains_interior(*point):
                if seg.horizontal:
                    endpoint_map[point].update((Direction.E, Direction.W))
                else:
                    endpoint_map[point].update((Direction.N, Direction.S))

    return endpoint_map


def is_junction(endpoint_map: EndpointMap, x: int, y: int) -> bool:
    return len(endpoint_map.get((x, y), ())) >= 2


def classify(directions: set[Direction] | frozenset[Direction]) -> JunctionKind | None:
    """Junction kind for a direction set, or None for a free end."""
    n = len(directions)
    if n >= 4:
        return JunctionKind.CROSS
    if n == 3:
        return JunctionKind.T
    if n == 2:
        if directions in ({Direction.E, Direction.W}, {Direction.N, Direction.S}):
            return JunctionKind.STRAIGHT
        return JunctionKind.L
    return None


def junctions(layout: GridLayout) -> list[WallJoint]:
    """All endpoints with two or more directions, ordered by row then column."""
    endpoint_map = build_endpoint_map(layout)
    joints = []
    for (x, y), dirs in endpoint_map.items():
        kind = classify(dirs)
        if kind is not None:
            joints.append(WallJoint(x, y, frozenset(dirs), kind))
    joints.sort(key=lambda j: (j.y, j.x))
    return joints


def open_ends(layout: GridLayout) -> list[tuple[int, int]]:
    """Endpoints with a single direction — the ones that get an end cap."""
    endpoint_map = build_endpoint_map(layout)
    return sorted(
        (p for p, dirs in endpoint_map.items() if len(dirs) == 1),
        key=lambda p: (p[1], p[0]),
    )


# ── Segment geometry ───────────────────────────────────────────────


def collinear_overlap(a: WallSegment, b: WallSegment) -> bool:
    """True if *a* and *b* lie on the same line and share a positive length.

    Segments that merely touch end to end (overlap length 0) are allowed,
    as are perpendicular crossings.
    """
    if a.horizontal != b.horizontal:
        return False
    return a.line.intersection(b.line).length > 0


def intersection(h: WallSegment, v: WallSegment) -> tuple[int, int] | None:
    """Crossing point of a horizontal and a vertical segment, if any."""
    hit = h.line.intersection(v.line)
    if hit.is_empty or not isinstance(hit, Point):
        return None
    return (int(round(hit.x)), int(round(hit.y)))


def corner_points(segments: list[WallSegment]) -> list[tuple[int, int]]:
    """Every horizontal/vertical intersection among *segments*, deduplicated."""
    horizontals = [s for s in segments if s.horizontal]
    verticals = [s for s in segments if not s.horizontal]
    seen: set[tuple[int, int]] = set()
    points: list[tuple[int, int]] = []
    for h in horizontals:
        for v in verticals:
            p = intersection(h, v)
            if p is not None and p not in seen:
                seen.add(p)
                points.append(p)
    return points


def project_onto(seg: WallSegment, x: float, y: float) -> tuple[int, int]:
    """Closest point on *seg* to ``(x, y)`` (clamped to the segment's extent)."""
    line = seg.line
    hit = line.interpolate(line.project(Point(x, y)))
    return (int(round(hit.x)), int(round(hit.y)))
