"""Tests for wall connectivity — segments, endpoints and junctions.

Uses the walled room fixture: a T at (4,2) and L corners at (9,2) and
(9,6), with free ends at (4,0), (1,2) and (5,6).
"""

from __future__ import annotations

import unittest

from floormap.layout.models import FurnitureObject, ObjectKind
from floormap.walls.connectivity import (
    wall_segments, build_endpoint_map, is_junction, classify, junctions,
    open_ends, collinear_overlap, intersection, corner_points, project_onto,
)
from floormap.walls.models import Direction, JunctionKind, WallSegment
from tests.dining_room_fixture import make_empty_room, make_walled_room, wall

N, E, S, W = Direction.N, Direction.E, Direction.S, Direction.W


class TestWallSegment(unittest.TestCase):

    def test_horizontal_from_wide_rect(self):
        seg = WallSegment.from_rect("w", 2, 5, 4, 1)
        self.assertTrue(seg.horizontal)
        self.assertEqual(seg.endpoints, ((2, 5), (6, 5)))
        self.assertEqual(seg.length, 4)

    def test_vertical_from_tall_rect(self):
        seg = WallSegment.from_rect("w", 3, 1, 1, 5)
        self.assertFalse(seg.horizontal)
        self.assertEqual(seg.endpoints, ((3, 1), (3, 6)))

    def test_square_rect_is_horizontal(self):
        self.assertTrue(WallSegment.from_rect("w", 0, 0, 2, 2).horizontal)

    def test_translated(self):
        seg = WallSegment.from_rect("w", 2, 5, 4, 1).translated(-1, 2)
        self.assertEqual(seg.endpoints, ((1, 7), (5, 7)))
        self.assertEqual(seg.item_id, "w")

    def test_contains_interior_excludes_endpoints(self):
        seg = WallSegment.from_rect("w", 2, 5, 4, 1)
        self.assertTrue(seg.contains_interior(4, 5))
        self.assertFalse(seg.contains_interior(2, 5))
        self.assertFalse(seg.contains_interior(6, 5))
        self.assertFalse(seg.contains_interior(4, 6))


class TestWallSegments(unittest.TestCase):

    def test_only_blocking_walls_and_dividers(self):
        room = make_empty_room()
        room.objects = [
            wall("O1", 0, 0, 3, 1),
            wall("O2", 0, 4, 2, 1, kind=ObjectKind.DIVIDER),
            wall("O3", 0, 6, 1, 1, kind=ObjectKind.DOOR),
            FurnitureObject(id="O4", origin_x=5, origin_y=5, span_x=3,
                            object_kind=ObjectKind.WALL, visual_only=True),
        ]
        self.assertEqual([s.item_id for s in wall_segments(room)], ["O1", "O2"])

    def test_exclude_id(self):
        ids = [s.item_id for s in wall_segments(make_walled_room(), exclude_id="O1")]
        self.assertEqual(ids, ["O6", "O3", "O4"])


class TestEndpointMap(unittest.TestCase):

    def setUp(self):
        self.endpoint_map = build_endpoint_map(make_walled_room())

    def test_directions(self):
        self.assertEqual(self.endpoint_map[(4, 2)], {N, E, W})   # O6 ends inside O1
        self.assertEqual(self.endpoint_map[(9, 2)], {W, S})
        self.assertEqual(self.endpoint_map[(9, 6)], {N, W})
        self.assertEqual(self.endpoint_map[(1, 2)], {E})
        self.assertEqual(self.endpoint_map[(4, 0)], {S})
        self.assertEqual(self.endpoint_map[(5, 6)], {E})

    def test_only_endpoints_are_keys(self):
        self.assertEqual(len(self.endpoint_map), 6)

    def test_is_junction(self):
        self.assertTrue(is_junction(self.endpoint_map, 4, 2))
        self.assertTrue(is_junction(self.endpoint_map, 9, 6))
        self.assertFalse(is_junction(self.endpoint_map, 1, 2))
        self.assertFalse(is_junction(self.endpoint_map, 0, 0))

    def test_empty_layout(self):
        self.assertEqual(build_endpoint_map(make_empty_room()), {})


class TestJunctions(unittest.TestCase):

    def test_classify(self):
        self.assertEqual(classify({E, W}), JunctionKind.STRAIGHT)
        self.assertEqual(classify({N, S}), JunctionKind.STRAIGHT)
        self.assertEqual(classify({N, E}), JunctionKind.L)
        self.assertEqual(classify({S, W}), JunctionKind.L)
        self.assertEqual(classify({N, E, W}), JunctionKind.T)
        self.assertEqual(classify({N, E, S, W}), JunctionKind.CROSS)
        self.assertIsNone(classify({E}))
        self.assertIsNone(classify(set()))

    def test_walled_room_junctions_in_row_order(self):
        joints = junctions(make_walled_room())
        self.assertEqual([(j.x, j.y, j.kind) for j in joints], [
            (4, 2, JunctionKind.T),
            (9, 2, JunctionKind.L),
            (9, 6, JunctionKind.L),
        ])
        self.assertEqual(joints[0].directions, frozenset({N, E, W}))

    def test_open_ends(self):
        self.assertEqual(open_ends(make_walled_room()), [(4, 0), (1, 2), (5, 6)])

    def test_straight_run(self):
        room = make_empty_room()
        room.objects = [wall("O1", 1, 3, 3, 1), wall("O2", 4, 3, 2, 1)]
        joints = junctions(room)
        self.assertEqual(len(joints), 1)
        self.assertEqual((joints[0].x, joints[0].y, joints[0].kind), (4, 3, JunctionKind.STRAIGHT))

    def test_cross(self):
        room = make_empty_room()
        room.objects = [
            wall("O1", 3, 3, 2, 1),     # (3,3)→(5,3)
            wall("O2", 5, 3, 2, 1),     # (5,3)→(7,3)
            wall("O3", 5, 1, 1, 2),     # (5,1)→(5,3)
            wall("O4", 5, 3, 1, 2),     # (5,3)→(5,5)
        ]
        kinds = {(j.x, j.y): j.kind for j in junctions(room)}
        self.assertEqual(kinds, {(5, 3): JunctionKind.CROSS})

    def test_wall_crossing_through_interior_is_t_at_endpoint(self):
        room = make_empty_room()
        room.objects = [wall("O1", 0, 4, 6, 1), wall("O2", 3, 1, 1, 3)]   # O2 ends at (3,4)
        joints = junctions(room)
        self.assertEqual([(j.x, j.y, j.kind) for j in joints], [(3, 4, JunctionKind.T)])


class TestSegmentGeometry(unittest.TestCase):

    def test_collinear_overlap_positive_length(self):
        a = WallSegment("a", 0, 2, 4, 2)
        self.assertTrue(collinear_overlap(a, WallSegment("b", 3, 2, 6, 2)))
        self.assertTrue(collinear_overlap(a, WallSegment("b", 1, 2, 2, 2)))

    def test_touching_end_to_end_allowed(self):
        a = WallSegment("a", 0, 2, 4, 2)
        self.assertFalse(collinear_overlap(a, WallSegment("b", 4, 2, 7, 2)))

    def test_parallel_lines_and_crossings_do_not_overlap(self):
        a = WallSegment("a", 0, 2, 4, 2)
        self.assertFalse(collinear_overlap(a, WallSegment("b", 0, 3, 4, 3)))
        self.assertFalse(collinear_overlap(a, WallSegment("b", 2, 0, 2, 4)))

    def test_vertical_overlap(self):
        a = WallSegment("a", 5, 0, 5, 4)
        self.assertTrue(collinear_overlap(a, WallSegment("b", 5, 2, 5, 6)))
        self.assertFalse(collinear_overlap(a, WallSegment("b", 5, 4, 5, 6)))

    def test_intersection(self):
        h = WallSegment("h", 0, 3, 6, 3)
        self.assertEqual(intersection(h, WallSegment("v", 2, 0, 2, 5)), (2, 3))
        self.assertEqual(intersection(h, WallSegment("v", 6, 3, 6, 7)), (6, 3))
        self.assertIsNone(intersection(h, WallSegment("v", 8, 0, 8, 5)))

    def test_corner_points(self):
        segments = wall_segments(make_walled_room())
        self.assertEqual(sorted(corner_points(segments)), [(4, 2), (9, 2), (9, 6)])

    def test_project_onto_clamps_to_extent(self):
        seg = WallSegment("s", 2, 5, 6, 5)
        self.assertEqual(project_onto(seg, 4, 3), (4, 5))
        self.assertEqual(project_onto(seg, 9, 4), (6, 5))
        self.assertEqual(project_onto(seg, 0, 5), (2, 5))


if __name__ == "__main__":
    unittest.main()
