# tests/test_entities.py
from __future__ import annotations

import unittest

from xtract.entities import EntityTable


class TestEntityTable(unittest.TestCase):
    def test_list_of_pairs_encoding(self) -> None:
        table = EntityTable.from_raw(
            [
                {"key": "0", "value": {"type": "LINK", "mutability": "MUTABLE", "data": {"url": "https://a"}}},
                {"key": "1", "value": {"type": "DIVIDER", "mutability": "IMMUTABLE", "data": {}}},
            ]
        )
        self.assertEqual(len(table), 2)

        link = table.get("0")
        assert link is not None
        self.assertEqual(link.type, "LINK")
        self.assertEqual(link.mutability, "MUTABLE")
        self.assertEqual(link.data["url"], "https://a")

    def test_mapping_encoding_and_numeric_keys(self) -> None:
        table = EntityTable.from_raw({"3": {"type": "LINK", "data": {"url": "https://b"}}})

        by_int = table.get(3)
        by_str = table.get("3")
        self.assertIsNotNone(by_int)
        self.assertIs(by_int, by_str)
        self.assertIn(3, table)

    def test_first_pair_wins_on_duplicate_keys(self) -> None:
        table = EntityTable.from_raw(
            [
                {"key": "0", "value": {"type": "LINK", "data": {"url": "https://first"}}},
                {"key": "0", "value": {"type": "LINK", "data": {"url": "https://second"}}},
            ]
        )
        entity = table.get("0")
        assert entity is not None
        self.assertEqual(entity.data["url"], "https://first")

    def test_missing_and_malformed_entries(self) -> None:
        table = EntityTable.from_raw([{"key": "0"}, "junk", {"key": "1", "value": {"data": {}}}])
        self.assertEqual(len(table), 0)
        self.assertIsNone(table.get("0"))
        self.assertIsNone(table.get(None))
        self.assertIsNone(table.get(True))

    def test_absent_table(self) -> None:
        self.assertEqual(len(EntityTable.from_raw(None)), 0)


if __name__ == "__main__":
    unittest.main()
