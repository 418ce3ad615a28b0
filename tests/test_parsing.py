"""Tests for the document boundary — parsing, normalization, serialization.

Validates:
  - Persisted documents parse into the dataclasses, legacy fields included
  - Malformed numbers are normalized, never rejected
  - Structurally unusable documents raise LayoutParseError
  - Unknown document keys survive a parse → serialize round-trip
"""

from __future__ import annotations

import math
import unittest

from floormap.layout.models import (
    ItemKind, ObjectKind, TableShape, LayoutParseError, UnknownItemError, LayoutError,
)
from floormap.layout.parsing import (
    parse_layout, ensure_mask, normalize_rotation, normalize_scale,
    normalize_span, normalize_coord, normalize_seats, fresh_item_id,
)
from floormap.layout.serialization import layout_to_dict
from tests.dining_room_fixture import make_room_document


class TestScalarNormalization(unittest.TestCase):

    def test_span_floored_and_at_least_one(self):
        self.assertEqual(normalize_span(2.7), 2)
        self.assertEqual(normalize_span(0), 1)
        self.assertEqual(normalize_span(-4), 1)
        self.assertEqual(normalize_span(math.inf), 1)
        self.assertEqual(normalize_span(None), 1)
        self.assertEqual(normalize_span("3"), 3)

    def test_coord_never_negative(self):
        self.assertEqual(normalize_coord(-2), 0)
        self.assertEqual(normalize_coord(4.9), 4)
        self.assertEqual(normalize_coord(math.nan), 0)

    def test_rotation_snaps_to_45(self):
        self.assertEqual(normalize_rotation(44), 45)
        self.assertEqual(normalize_rotation(22.4), 0)
        self.assertEqual(normalize_rotation(22.5), 45)
        self.assertEqual(normalize_rotation(100), 90)

    def test_rotation_wraps_into_range(self):
        self.assertEqual(normalize_rotation(360), 0)
        self.assertEqual(normalize_rotation(400), 45)
        self.assertEqual(normalize_rotation(-45), 315)
        self.assertEqual(normalize_rotation(-90), 270)

    def test_rotation_garbage_is_zero(self):
        self.assertEqual(normalize_rotation(None), 0)
        self.assertEqual(normalize_rotation("north"), 0)
        self.assertEqual(normalize_rotation(math.nan), 0)

    def test_scale_clamped(self):
        self.assertEqual(normalize_scale(3), 1.6)
        self.assertEqual(normalize_scale(0.1), 0.5)
        self.assertEqual(normalize_scale(1.2), 1.2)
        self.assertEqual(normalize_scale(None), 1.0)
        self.assertEqual(normalize_scale(math.inf, fallback=0.8), 0.8)

    def test_seats(self):
        self.assertEqual(normalize_seats(0), 1)
        self.assertEqual(normalize_seats(None, fallback=4), 4)

    def test_fresh_item_id_fills_lowest_gap(self):
        self.assertEqual(fresh_item_id("T", set()), "T1")
        self.assertEqual(fresh_item_id("T", {"T1", "T2", "T4"}), "T3")


class TestEnsureMask(unittest.TestCase):

    def test_missing_mask_is_fully_active(self):
        self.assertEqual(ensure_mask(None, 2, 2), [1, 1, 1, 1])

    def test_short_mask_padded_with_warning(self):
        with self.assertLogs("floormap.layout.parsing", level="WARNING"):
            self.assertEqual(ensure_mask([0, 1], 2, 2), [0, 1, 1, 1])

    def test_long_mask_truncated(self):
        with self.assertLogs("floormap.layout.parsing", level="WARNING"):
            self.assertEqual(ensure_mask([1, 0, 1, 0, 1], 2, 2), [1, 0, 1, 0])

    def test_non_binary_values_are_inactive(self):
        self.assertEqual(ensure_mask([1, 2, "x", 1.0], 2, 2), [1, 0, 0, 1])


class TestParseLayout(unittest.TestCase):

    def setUp(self):
        self.layout = parse_layout(make_room_document())

    def test_dimensions_and_metadata(self):
        self.assertEqual((self.layout.rows, self.layout.cols), (8, 12))
        self.assertEqual(self.layout.id, "L1")
        self.assertEqual(self.layout.restaurant_id, "R1")
        self.assertTrue(self.layout.is_active)
        self.assertEqual(len(self.layout.mask), 96)

    def test_table_fields(self):
        t = self.layout.get("T1")
        self.assertIs(t.kind, ItemKind.TABLE)
        self.assertEqual((t.origin_x, t.origin_y, t.span_x, t.span_y), (5, 3, 2, 2))
        self.assertEqual(t.shape, TableShape.SQUARE)
        self.assertEqual(t.seat_count, 4)
        self.assertEqual(t.name, "Table 1")

    def test_legacy_rotation_used_when_rotation_deg_missing(self):
        self.assertEqual(self.layout.get("O6").rotation_deg, 90)
        self.assertEqual(self.layout.get("O3").rotation_deg, 90)
        self.assertEqual(self.layout.get("O4").rotation_deg, 0)

    def test_visual_only_flag(self):
        plant = self.layout.get("O5")
        self.assertTrue(plant.visual_only)
        self.assertFalse(plant.participates_in_collision)
        self.assertTrue(self.layout.get("O1").participates_in_collision)

    def test_extra_keys_preserved(self):
        self.assertEqual(self.layout.extra["floorColor"], "parquet_blue")
        out = layout_to_dict(self.layout)
        self.assertEqual(out["floorColor"], "parquet_blue")
        self.assertEqual(out["createdAt"], "2025-03-01T10:00:00Z")

    def test_serialization_shape(self):
        out = layout_to_dict(self.layout)
        self.assertEqual(out["gridRows"], 8)
        self.assertEqual(out["gridCols"], 12)
        objects = {o["id"]: o for o in out["objects"]}
        self.assertEqual(objects["O5"]["kind"], "visualOnly")
        self.assertEqual(objects["O1"]["kind"], "object")
        self.assertEqual(objects["O1"]["label"], "wall_h")
        self.assertEqual(objects["O6"]["rotationDeg"], 90)
        self.assertNotIn("rotation", objects["O6"])
        self.assertEqual(out["tables"][0]["tableNumber"], 1)

    def test_reparse_of_serialized_layout_is_stable(self):
        once = layout_to_dict(self.layout)
        self.assertEqual(layout_to_dict(parse_layout(once)), once)

    def test_missing_objects_and_mask(self):
        layout = parse_layout({"gridRows": 2, "gridCols": 3, "tables": []})
        self.assertEqual(layout.objects, [])
        self.assertEqual(layout.mask, [1] * 6)

    def test_unknown_item_lookup_raises(self):
        with self.assertRaises(UnknownItemError) as ctx:
            self.layout.get("nope")
        self.assertIsInstance(ctx.exception, LayoutError)
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIn("nope", str(ctx.exception))


class TestParseRepairs(unittest.TestCase):

    def test_duplicate_ids_renamed(self):
        doc = {"gridRows": 4, "gridCols": 4, "tables": [
            {"id": "T1", "gridX": 0, "gridY": 0},
            {"id": "T1", "gridX": 2, "gridY": 2},
        ]}
        with self.assertLogs("floormap.layout.parsing", level="WARNING") as logs:
            layout = parse_layout(doc)
        self.assertEqual([t.id for t in layout.tables], ["T1", "T2"])
        self.assertTrue(any("Duplicate" in line for line in logs.output))

    def test_missing_id_assigned(self):
        layout = parse_layout({"gridRows": 4, "gridCols": 4, "objects": [{"type": "door"}]})
        self.assertEqual(layout.objects[0].id, "O1")

    def test_unknown_shape_and_type_coerced(self):
        doc = {"gridRows": 4, "gridCols": 4,
               "tables": [{"id": "T1", "shape": "hexagon"}],
               "objects": [{"id": "O1", "type": "aquarium"}]}
        with self.assertLogs("floormap.layout.parsing", level="WARNING"):
            layout = parse_layout(doc)
        self.assertEqual(layout.tables[0].shape, TableShape.SQUARE)
        self.assertEqual(layout.objects[0].object_kind, ObjectKind.VISUAL)

    def test_malformed_numbers_normalized(self):
        doc = {"gridRows": 4, "gridCols": 4, "tables": [
            {"id": "T1", "gridX": -3, "gridY": 1.7, "spanX": 0, "spanY": "abc",
             "scale": 9, "rotationDeg": 50},
        ]}
        t = parse_layout(doc).tables[0]
        self.assertEqual((t.origin_x, t.origin_y, t.span_x, t.span_y), (0, 1, 1, 1))
        self.assertEqual(t.scale, 1.6)
        self.assertEqual(t.rotation_deg, 45)

    def test_name_derived_from_table_number(self):
        layout = parse_layout({"gridRows": 4, "gridCols": 4,
                               "tables": [{"id": "T1", "tableNumber": 3}]})
        self.assertEqual(layout.tables[0].name, "Table 3")


class TestParseErrors(unittest.TestCase):

    def test_not_a_mapping(self):
        with self.assertRaises(LayoutParseError):
            parse_layout([1, 2, 3])

    def test_missing_dimension(self):
        with self.assertRaises(LayoutParseError) as ctx:
            parse_layout({"gridCols": 4})
        self.assertEqual(ctx.exception.field_name, "gridRows")

    def test_non_positive_dimension(self):
        with self.assertRaises(LayoutParseError):
            parse_layout({"gridRows": 0, "gridCols": 4})

    def test_tables_not_a_list(self):
        with self.assertRaises(LayoutParseError) as ctx:
            parse_layout({"gridRows": 4, "gridCols": 4, "tables": {"T1": {}}})
        self.assertEqual(ctx.exception.field_name, "tables")


if __name__ == "__main__":
    unittest.main()
