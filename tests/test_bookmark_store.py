"""Tests for the SQLite bookmark store."""

import dataclasses
import json
import os
import tempfile
import threading

import pytest
from sqlalchemy import update

from job_board.errors import StorageReadError, StorageWriteError
from job_board.jobs.models import Job, Media
from job_board.jobs.normalizer import normalize_job
from job_board.models import Bookmark
from job_board.storage.bookmark_store import BookmarkStore


@pytest.fixture
def db_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield os.path.join(tmpdir, "nested", "bookmarks.db")


@pytest.fixture
def store(db_path):
    s = BookmarkStore(db_path)
    yield s
    s.close()


@pytest.fixture
def cook():
    return normalize_job({"id": "42", "title": "Cook", "company_name": "Spice Route"})


class TestBookmarkStore:
    def test_empty(self, store):
        assert store.list_all() == []
        assert store.count() == 0
        assert not store.is_bookmarked("42")

    def test_toggle_on_then_off(self, store, cook):
        assert store.toggle(cook) is True
        jobs = store.list_all()
        assert [j.id for j in jobs] == ["42"]
        assert jobs[0] == cook
        assert store.is_bookmarked("42")

        assert store.toggle(cook) is False
        assert store.list_all() == []
        assert not store.is_bookmarked("42")

    def test_int_and_str_ids_share_a_bookmark(self, store):
        store.toggle(Job(id=42, title="Cook"))
        assert store.is_bookmarked("42")
        assert store.toggle(Job(id="42", title="Cook")) is False
        assert store.count() == 0

    def test_no_duplicates_after_many_toggles(self, store):
        jobs = [Job(id=i, title=f"Job {i}") for i in range(4)]
        for job in jobs + jobs[:2] + jobs[1:3]:
            store.toggle(job)
        ids = [j.id for j in store.list_all()]
        assert len(ids) == len(set(ids))
        assert sorted(ids) == [1, 3]

    def test_keeps_bookmarking_order(self, store):
        for job_id in (7, 3, 9):
            store.toggle(Job(id=job_id))
        store.toggle(Job(id=3))
        store.toggle(Job(id=3))
        assert [j.id for j in store.list_all()] == [7, 9, 3]

    def test_snapshot_not_live(self, store, cook):
        store.toggle(cook)
        refetched = dataclasses.replace(cook, title="Head Cook", salary="₹30000")
        assert store.is_bookmarked(refetched.id)
        assert store.list_all()[0].title == "Cook"

    def test_persists_across_instances(self, db_path, cook):
        with BookmarkStore(db_path) as first:
            first.toggle(cook)
        with BookmarkStore(db_path) as second:
            assert second.list_all() == [cook]

    def test_clear(self, store, cook):
        store.toggle(cook)
        store.toggle(Job(id=1))
        store.clear()
        assert store.count() == 0

    def test_concurrent_toggles_are_serialized(self, store, cook):
        threads = [threading.Thread(target=store.toggle, args=(cook,)) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        # an even number of toggles restores the original membership
        assert store.list_all() == []


class TestBookmarkStoreFailures:
    def test_corrupt_file_raises_read_error(self, db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        with open(db_path, "wb") as f:
            f.write(b"this is definitely not a sqlite database" * 100)
        with BookmarkStore(db_path) as store:
            with pytest.raises(StorageReadError):
                store.list_all()

    def test_corrupt_file_raises_write_error(self, db_path, cook):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        with open(db_path, "wb") as f:
            f.write(b"garbage" * 1000)
        with BookmarkStore(db_path) as store:
            with pytest.raises(StorageWriteError):
                store.toggle(cook)

    def test_corrupt_payload_raises_read_error(self, store, cook):
        store.toggle(cook)
        with store.Session() as session, session.begin():
            session.execute(update(Bookmark).values(payload="{not json"))
        with pytest.raises(StorageReadError):
            store.list_all()

    def test_wrong_shape_payload_raises_read_error(self, store, cook):
        store.toggle(cook)
        payload = cook.to_dict()
        payload["additional_info"]["content_fields"] = []
        with store.Session() as session, session.begin():
            session.execute(update(Bookmark).values(payload=json.dumps(payload)))
        with pytest.raises(StorageReadError):
            store.list_all()

    def test_unserializable_snapshot_raises_write_error(self, store):
        job = Job(id=77, media=Media(videos=(object(),)))
        with pytest.raises(StorageWriteError):
            store.toggle(job)
        assert store.count() == 0
