"""
Unit Tests for the Group Store

Runs against in-memory DuckDB databases, plus one file database in a
temporary directory.
"""

import os
import tempfile
import unittest
from datetime import datetime

import duckdb
import polars as pl

from groupfeed.load.exceptions import GroupAlreadyExistsError
from groupfeed.load.group_store import GroupStore
from groupfeed.transformation.transformers import postings_to_frame
from sample_data import GROUP_URL, make_remote_group


class TestGroupStore(unittest.TestCase):
    def setUp(self):
        self.store = GroupStore(":memory:")

    def tearDown(self):
        self.store.close()

    def test_create_and_find_group(self):
        group = self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)

        self.assertIsInstance(group.id, int)
        self.assertEqual(group.fb_id, "42")
        self.assertIsInstance(group.created_at, datetime)
        self.assertEqual(self.store.find_group("42"), group)
        self.assertIsNone(self.store.find_group("43"))

    def test_duplicate_group_is_rejected(self):
        self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)

        with self.assertRaises(GroupAlreadyExistsError) as ctx:
            self.store.create_group(fb_id="42", name="Other", fb_url=None)

        self.assertEqual(ctx.exception.fb_id, "42")
        self.assertEqual(self.store.count_groups(), 1)
        self.assertEqual(self.store.find_group("42").name, "Python Taiwan")

    def test_group_ids_are_distinct(self):
        first = self.store.create_group(fb_id="1", name="One", fb_url=None)
        second = self.store.create_group(fb_id="2", name="Two", fb_url=None)

        self.assertNotEqual(first.id, second.id)
        self.assertEqual([g.fb_id for g in self.store.list_groups()], ["1", "2"])

    def test_add_postings(self):
        group = self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)
        df = postings_to_frame(group.id, make_remote_group().feed)

        inserted = self.store.add_postings(group, df)

        self.assertEqual(inserted, 3)
        postings = self.store.list_postings(group)
        self.assertEqual([p.fb_id for p in postings], ["42_1001", "42_1002", "42_1003"])
        self.assertTrue(all(p.group_id == group.id for p in postings))

        first = postings[0]
        self.assertEqual(first.created_time, datetime(2017, 1, 2, 3, 4, 5))
        self.assertEqual(first.attachment_media_url, "https://example.com/pycon.png")
        self.assertIsNone(postings[1].attachment_title)
        self.assertEqual(postings[2].attachment_title, "Slides")
        self.assertIsNone(postings[2].attachment_media_url)

    def test_postings_belong_to_their_group(self):
        group = self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)
        other = self.store.create_group(fb_id="7", name="Other", fb_url=None)
        self.store.add_postings(group, postings_to_frame(group.id, make_remote_group().feed))

        self.assertEqual(self.store.count_postings(group), 3)
        self.assertEqual(self.store.count_postings(other), 0)
        self.assertEqual(self.store.count_postings(), 3)

    def test_group_id_comes_from_the_group(self):
        group = self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)
        df = postings_to_frame(999, make_remote_group().feed)

        self.store.add_postings(group, df)

        self.assertEqual({p.group_id for p in self.store.list_postings(group)}, {group.id})

    def test_empty_batch(self):
        group = self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)

        inserted = self.store.add_postings(group, postings_to_frame(group.id, []))

        self.assertEqual(inserted, 0)
        self.assertEqual(self.store.count_postings(), 0)

    def test_postings_frame(self):
        group = self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)
        self.store.add_postings(group, postings_to_frame(group.id, make_remote_group().feed))

        df = self.store.postings_frame(group)

        self.assertIsInstance(df, pl.DataFrame)
        self.assertEqual(df.height, 3)
        self.assertEqual(df["fb_id"].to_list(), ["42_1001", "42_1002", "42_1003"])

    def test_schema_initialization_is_idempotent(self):
        self.store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)

        self.store.initialize_schema()

        self.assertEqual(self.store.count_groups(), 1)

    def test_postings_require_a_stored_group(self):
        with self.assertRaises(duckdb.Error):
            self.store.conn.execute(
                "INSERT INTO postings (group_id, fb_id) VALUES (?, ?)", [12345, "x_1"]
            )


class TestGroupStoreFile(unittest.TestCase):
    def test_data_survives_reopen(self):
        with tempfile.TemporaryDirectory() as tmp:
            db_path = os.path.join(tmp, "nested", "groupfeed.duckdb")

            with GroupStore(db_path) as store:
                group = store.create_group(fb_id="42", name="Python Taiwan", fb_url=GROUP_URL)
                store.add_postings(group, postings_to_frame(group.id, make_remote_group().feed))

            self.assertTrue(os.path.exists(db_path))

            with GroupStore(db_path) as store:
                group = store.find_group("42")
                self.assertIsNotNone(group)
                self.assertEqual(store.count_postings(group), 3)
                with self.assertRaises(GroupAlreadyExistsError):
                    store.create_group(fb_id="42", name="Again", fb_url=None)


if __name__ == "__main__":
    unittest.main()
