"""Tests for the in-memory history store."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from summarizer.schemas import HistoryItem
from summarizer.services.history_service import HistoryStore


class TestHistoryStore:

    def test_save_assigns_id_and_created_at(self, history: HistoryStore) -> None:
        item = history.save({"summary": "s", "transcript": "t"})

        assert isinstance(item, HistoryItem)
        assert item.id
        assert item.created_at is not None
        data = item.to_dict()
        assert data["summary"] == "s"
        assert data["transcript"] == "t"
        assert "createdAt" in data

    def test_caller_cannot_choose_id(self, history: HistoryStore) -> None:
        item = history.save({"id": "mine", "createdAt": "yesterday", "summary": "s"})

        assert item.id != "mine"
        assert item.to_dict()["createdAt"] != "yesterday"

    def test_ids_unique_across_sequential_saves(self, history: HistoryStore) -> None:
        ids = [history.save({"n": n}).id for n in range(200)]

        assert len(set(ids)) == 200

    def test_list_preserves_insertion_order(self, history: HistoryStore) -> None:
        for n in range(5):
            history.save({"n": n})

        assert [item.to_dict()["n"] for item in history.list()] == [0, 1, 2, 3, 4]

    def test_list_is_a_snapshot(self, history: HistoryStore) -> None:
        history.save({"n": 1})
        snapshot = history.list()

        history.save({"n": 2})
        history.delete_by_id(snapshot[0].id)

        assert len(snapshot) == 1
        assert snapshot[0].to_dict()["n"] == 1
        assert [item.to_dict()["n"] for item in history.list()] == [2]

    def test_caller_mutation_does_not_leak_into_store(self, history: HistoryStore) -> None:
        record = {"videoData": {"title": "T"}}
        item = history.save(record)

        record["videoData"]["title"] = "changed"

        assert history.list()[0].to_dict()["videoData"]["title"] == "T"
        assert item.to_dict()["videoData"]["title"] == "T"

    def test_returned_items_cannot_alter_store(self, history: HistoryStore) -> None:
        saved = history.save({"videoData": {"title": "T"}})
        saved.videoData["title"] = "edited via save"

        listed = history.list()[0]
        listed.videoData["title"] = "edited via list"

        assert history.list()[0].to_dict()["videoData"] == {"title": "T"}

    def test_items_are_immutable(self, history: HistoryStore) -> None:
        item = history.save({"summary": "s"})

        with pytest.raises(Exception):
            item.id = "other"

    def test_delete_existing(self, history: HistoryStore) -> None:
        keep = history.save({"n": 1})
        drop = history.save({"n": 2})

        assert history.delete_by_id(drop.id) is True
        assert [item.id for item in history.list()] == [keep.id]

    def test_delete_missing_is_noop(self, history: HistoryStore) -> None:
        existing = history.save({"n": 1})

        assert history.delete_by_id("does-not-exist") is False
        assert [item.id for item in history.list()] == [existing.id]

    def test_repeated_delete_is_idempotent(self, history: HistoryStore) -> None:
        item = history.save({"n": 1})

        assert history.delete_by_id(item.id) is True
        assert history.delete_by_id(item.id) is False
        assert history.delete_by_id(item.id) is False
        assert len(history) == 0

    def test_concurrent_saves_lose_nothing(self, history: HistoryStore) -> None:
        with ThreadPoolExecutor(max_workers=16) as pool:
            items = list(pool.map(lambda n: history.save({"n": n}), range(50)))

        assert len({item.id for item in items}) == 50
        assert len(history) == 50
        assert {item.to_dict()["n"] for item in history.list()} == set(range(50))

    def test_concurrent_saves_and_deletes(self, history: HistoryStore) -> None:
        seeded = [history.save({"n": n}) for n in range(25)]

        def work(n: int) -> None:
            if n < 25:
                history.delete_by_id(seeded[n].id)
            else:
                history.save({"n": n})

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(work, range(50)))

        assert {item.to_dict()["n"] for item in history.list()} == set(range(25, 50))

    def test_clear(self, history: HistoryStore) -> None:
        history.save({"n": 1})
        history.clear()

        assert history.list() == []
