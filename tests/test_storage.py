"""
Unit tests for the key-value stores.
"""
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from kumoxi_quiz.storage import JsonFileStore, MemoryStore


class TestMemoryStore(unittest.TestCase):

    def test_get_set_delete(self):
        store = MemoryStore({"a": "1"})
        self.assertEqual(store.get("a"), "1")
        self.assertIsNone(store.get("b"))

        store.set("b", "2")
        self.assertEqual(store.get("b"), "2")

        store.delete("a")
        store.delete("missing")
        self.assertIsNone(store.get("a"))


class TestJsonFileStore(unittest.TestCase):
    """File-backed store."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "nested" / "storage.json"
        self.store = JsonFileStore(self.path)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_missing_file_reads_none(self):
        self.assertIsNone(self.store.get("key"))

    def test_set_creates_file_and_round_trips(self):
        self.store.set("key", "[1, 2]")

        self.assertTrue(self.path.exists())
        self.assertEqual(self.store.get("key"), "[1, 2]")
        self.assertEqual(JsonFileStore(self.path).get("key"), "[1, 2]")

    def test_keys_are_independent(self):
        self.store.set("a", "1")
        self.store.set("b", "2")
        self.store.delete("a")

        self.assertIsNone(self.store.get("a"))
        self.assertEqual(self.store.get("b"), "2")

    def test_unicode_values(self):
        self.store.set("name", "Zé Kumoxi ✓")
        self.assertEqual(self.store.get("name"), "Zé Kumoxi ✓")

    def test_malformed_file_reads_as_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{broken", encoding="utf-8")

        self.assertIsNone(self.store.get("key"))

        self.store.set("key", "value")
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {"key": "value"})

    def test_non_object_file_reads_as_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2, 3]", encoding="utf-8")
        self.assertIsNone(self.store.get("key"))

    def test_non_string_value_reads_none(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"key": [1, 2]}), encoding="utf-8")
        self.assertIsNone(self.store.get("key"))

    def test_no_temp_files_left_behind(self):
        self.store.set("a", "1")
        self.store.set("a", "2")

        leftovers = [p.name for p in self.path.parent.iterdir() if p.name != self.path.name]
        self.assertEqual(leftovers, [])

    def test_failed_replace_keeps_previous_content(self):
        self.store.set("key", "old")

        with patch("kumoxi_quiz.storage.os.replace", side_effect=OSError("boom")):
            with self.assertRaises(OSError):
                self.store.set("key", "new")

        self.assertEqual(self.store.get("key"), "old")
        leftovers = [p.name for p in self.path.parent.iterdir() if p.name != self.path.name]
        self.assertEqual(leftovers, [])


if __name__ == "__main__":
    unittest.main()
