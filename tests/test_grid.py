"""Tests for grid queries — cell activity, bounds and mask helpers."""

from __future__ import annotations

import unittest

from floormap.layout.grid import (
    is_cell_active, compute_occupied_bounds, compute_content_bounds,
    full_bounds, with_cell, inverted, padded_mask, filled_mask,
)
from floormap.layout.models import Bounds, GridLayout
from tests.dining_room_fixture import make_empty_room, make_walled_room, table


def _shaped(active: set[tuple[int, int]], rows: int = 8, cols: int = 12) -> GridLayout:
    """Room whose mask is 1 only on *active* cells."""
    room = make_empty_room(rows, cols)
    room.mask = [1 if (i % cols, i // cols) in active else 0 for i in range(rows * cols)]
    return room


class TestCellActivity(unittest.TestCase):

    def test_full_mask_is_active_everywhere(self):
        room = make_empty_room()
        self.assertTrue(is_cell_active(room, 0, 0))
        self.assertTrue(is_cell_active(room, 11, 7))

    def test_outside_grid_is_inactive(self):
        room = make_empty_room()
        for x, y in [(-1, 0), (0, -1), (12, 0), (0, 8)]:
            self.assertFalse(is_cell_active(room, x, y), (x, y))

    def test_zero_flag_is_inactive(self):
        room = make_empty_room()
        room.mask[0] = 0
        self.assertFalse(is_cell_active(room, 0, 0))
        self.assertTrue(is_cell_active(room, 1, 0))

    def test_short_mask_tail_reads_as_active(self):
        room = make_empty_room()
        room.mask = [0] * 12     # first row only
        self.assertFalse(is_cell_active(room, 5, 0))
        self.assertTrue(is_cell_active(room, 5, 1))

    def test_missing_mask_reads_as_active(self):
        room = make_empty_room()
        room.mask = []
        self.assertTrue(is_cell_active(room, 3, 3))


class TestOccupiedBounds(unittest.TestCase):

    def test_unshaped_grid_is_full_grid(self):
        self.assertEqual(compute_occupied_bounds(make_empty_room()), Bounds(0, 0, 11, 7))

    def test_shaped_mask_is_tight_box(self):
        active = {(x, y) for x in range(2, 6) for y in range(1, 4)}
        self.assertEqual(compute_occupied_bounds(_shaped(active)), Bounds(2, 1, 5, 3))

    def test_box_grows_to_cover_items(self):
        active = {(x, y) for x in range(2, 6) for y in range(1, 4)}
        room = _shaped(active)
        room.tables = [table("T1", 8, 5)]
        self.assertEqual(compute_occupied_bounds(room), Bounds(2, 1, 9, 6))

    def test_item_past_grid_edge_is_clamped(self):
        room = _shaped({(0, 0)})
        room.tables = [table("T1", 11, 7)]     # 2×2 hanging off the corner
        self.assertEqual(compute_occupied_bounds(room), Bounds(0, 0, 11, 7))

    def test_fully_inactive_and_empty_falls_back_to_grid(self):
        self.assertEqual(compute_occupied_bounds(_shaped(set())), full_bounds(make_empty_room()))


class TestContentBounds(unittest.TestCase):

    def test_empty_layout_is_full_grid(self):
        self.assertEqual(compute_content_bounds(make_empty_room()), Bounds(0, 0, 11, 7))

    def test_items_plus_margin_clamped(self):
        # Items cover x 1..9, y 0..6; one-cell margin, clamped at the edges.
        self.assertEqual(compute_content_bounds(make_walled_room()), Bounds(0, 0, 10, 7))

    def test_mask_is_ignored(self):
        room = _shaped({(0, 0)})
        room.tables = [table("T1", 4, 4)]
        self.assertEqual(compute_content_bounds(room), Bounds(3, 3, 6, 6))

    def test_zero_padding(self):
        room = make_empty_room()
        room.tables = [table("T1", 4, 4)]
        self.assertEqual(compute_content_bounds(room, pad_cells=0), Bounds(4, 4, 5, 5))


class TestMaskHelpers(unittest.TestCase):

    def test_padded_mask_fills_tail_with_ones(self):
        room = make_empty_room(2, 3)
        room.mask = [0, 1]
        self.assertEqual(padded_mask(room), [0, 1, 1, 1, 1, 1])

    def test_padded_mask_truncates_and_binarizes(self):
        room = make_empty_room(1, 3)
        room.mask = [2, 1, 0, 1, 1]
        self.assertEqual(padded_mask(room), [0, 1, 0])

    def test_with_cell_does_not_mutate(self):
        room = make_empty_room(2, 2)
        mask = with_cell(room, 1, 1, False)
        self.assertEqual(mask, [1, 1, 1, 0])
        self.assertEqual(room.mask, [1, 1, 1, 1])

    def test_inverted(self):
        room = make_empty_room(1, 4)
        room.mask = [1, 0, 1]
        self.assertEqual(inverted(room), [0, 1, 0, 0])

    def test_filled_mask(self):
        self.assertEqual(filled_mask(2, 2), [1, 1, 1, 1])
        self.assertEqual(filled_mask(0, 5), [])


if __name__ == "__main__":
    unittest.main()
