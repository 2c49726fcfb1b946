import os
import random
import sys
from pathlib import Path
import unittest

# Ensure the api package is importable when tests are run from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("JOURNAL_FILE", "/tmp/floor_designer_journal_test.log")

from config import Settings  # noqa: E402
from designer.catalog import color_for  # noqa: E402
from designer.room_store import RoomStore  # noqa: E402
from designer.room_types import NotFound, Room  # noqa: E402

GRID = 20.0


def _store() -> RoomStore:
    return RoomStore(Settings(journal_file=""), rng=random.Random(7))


class RoomStoreAddTest(unittest.TestCase):
    def test_add_bedroom_uses_catalog_defaults(self):
        store = _store()
        room = store.add("bedroom")

        self.assertEqual(room.size, (150.0, 120.0))
        self.assertAlmostEqual(room.area(GRID), 45.0)
        self.assertEqual(room.color, color_for("bedroom"))
        self.assertEqual(room.name, "Bedroom 1")
        self.assertEqual(len(store), 1)

    def test_add_places_room_inside_spawn_region(self):
        store = _store()
        for _ in range(25):
            room = store.add("kitchen")
            self.assertTrue(50 <= room.x < 350)
            self.assertTrue(50 <= room.y < 250)

    def test_names_count_existing_rooms_of_category(self):
        store = _store()
        first = store.add("bathroom")
        store.add("kitchen")
        second = store.add("bathroom")

        self.assertEqual(first.name, "Bathroom 1")
        self.assertEqual(second.name, "Bathroom 2")

    def test_unknown_category_still_adds(self):
        store = _store()
        with self.assertLogs("designer.catalog", level="WARNING"):
            room = store.add("attic")

        self.assertEqual(room.category, "attic")
        self.assertEqual(room.name, "Room 1")
        self.assertEqual(room.size, (150.0, 120.0))

    def test_list_keeps_insertion_order(self):
        store = _store()
        rooms = [store.add(c) for c in ("garage", "entrance", "living-room")]

        self.assertEqual([r.id for r in store.list()], [r.id for r in rooms])
        self.assertEqual(store.list(), store.list())


class RoomStoreUpdateTest(unittest.TestCase):
    def test_width_edit_recomputes_area(self):
        store = _store()
        room = store.add("bedroom")

        updated = store.update(room.id, {"width": 200})

        self.assertIs(updated, room)
        self.assertAlmostEqual(updated.area(GRID), 60.0)

    def test_category_change_recolors(self):
        store = _store()
        room = store.add("bedroom")

        store.update(room.id, {"category": "garage"})

        self.assertEqual(room.category, "garage")
        self.assertEqual(room.color, color_for("garage"))
        # Size is left alone when retyping.
        self.assertEqual(room.size, (150.0, 120.0))

    def test_color_is_not_directly_settable(self):
        store = _store()
        room = store.add("kitchen")

        store.update(room.id, {"color": "#000000", "unknown": 1, "name": "Galley"})

        self.assertEqual(room.color, color_for("kitchen"))
        self.assertEqual(room.name, "Galley")

    def test_nested_position_and_size(self):
        store = _store()
        room = store.add("entrance")

        store.update(room.id, {"position": {"x": 10, "y": 15}, "size": {"width": 40}})

        self.assertEqual(room.position, (10.0, 15.0))
        self.assertEqual(room.size, (40.0, 120.0))

    def test_missing_room_returns_not_found(self):
        store = _store()
        store.add("bedroom")

        result = store.update("room-missing", {"width": 10})

        self.assertIsInstance(result, NotFound)
        self.assertFalse(result)
        self.assertEqual(result.room_id, "room-missing")

    def test_invalid_number_leaves_room_untouched(self):
        store = _store()
        room = store.add("bedroom")

        with self.assertRaises(ValueError):
            store.update(room.id, {"name": "Study", "width": "wide"})

        self.assertEqual(room.name, "Bedroom 1")
        self.assertEqual(room.width, 150.0)

    def test_non_finite_numbers_are_rejected(self):
        store = _store()
        room = store.add("bedroom")

        for value in (float("inf"), float("-inf"), float("nan")):
            with self.subTest(value=value), self.assertRaises(ValueError):
                store.update(room.id, {"width": value})

        self.assertEqual(room.width, 150.0)
        self.assertEqual(room.area(GRID), 45.0)

    def test_null_name_is_rejected(self):
        store = _store()
        room = store.add("bedroom")

        with self.assertRaises(ValueError):
            store.update(room.id, {"name": None, "width": 200})

        self.assertEqual(room.name, "Bedroom 1")
        self.assertEqual(room.width, 150.0)

    def test_degenerate_size_is_stored_as_zero(self):
        store = _store()
        room = store.add("bedroom")

        with self.assertLogs("designer.room_store", level="WARNING"):
            store.update(room.id, {"width": 0, "height": -30})

        self.assertEqual(room.size, (0.0, 0.0))
        self.assertEqual(room.area(GRID), 0.0)


class RoomStoreDuplicateRemoveTest(unittest.TestCase):
    def test_duplicate_offsets_and_renames(self):
        store = _store()
        original = store.add("living-room")

        copy = store.duplicate(original.id)

        self.assertIsInstance(copy, Room)
        self.assertNotEqual(copy.id, original.id)
        self.assertEqual(copy.position, (original.x + 20, original.y + 20))
        self.assertEqual(copy.name, "Living Room 1 Copy")
        self.assertEqual(copy.size, original.size)
        self.assertEqual(copy.color, original.color)

    def test_duplicate_is_independent(self):
        store = _store()
        original = store.add("bedroom")
        copy = store.duplicate(original.id)

        store.update(copy.id, {"width": 300, "name": "Guest"})

        self.assertEqual(original.width, 150.0)
        self.assertEqual(original.name, "Bedroom 1")

    def test_duplicate_survives_removal_of_original(self):
        store = _store()
        original = store.add("bedroom")
        copy = store.duplicate(original.id)

        self.assertTrue(store.remove(original.id))

        self.assertEqual([r.id for r in store.list()], [copy.id])

    def test_duplicate_missing_returns_not_found(self):
        self.assertIsInstance(_store().duplicate("room-missing"), NotFound)

    def test_remove_missing_leaves_store_unchanged(self):
        store = _store()
        rooms = [store.add("bedroom"), store.add("kitchen")]

        self.assertFalse(store.remove("room-missing"))
        self.assertEqual(store.list(), tuple(rooms))

    def test_ids_stay_unique(self):
        store = _store()
        seen = set()
        for _ in range(20):
            room = store.add("bathroom")
            copy = store.duplicate(room.id)
            seen.update({room.id, copy.id})
            store.remove(room.id)

        self.assertEqual(len(seen), 40)
        ids = [r.id for r in store.list()]
        self.assertEqual(len(ids), len(set(ids)))


if __name__ == "__main__":
    unittest.main()
