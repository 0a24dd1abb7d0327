from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

import pytest

from fruit_catcher.exceptions import StorageError
from fruit_catcher.scores import SCORES_KEY, HighScoreEntry, HighScoreTable, JsonFileStore, MemoryStore


def _fixed_now():
    return datetime(2024, 1, 2, 3, 4, 5)


def test_record_appends_with_readable_timestamp():
    store = MemoryStore()
    table = HighScoreTable(store, now=_fixed_now)
    assert table.record_score(42) is True
    assert table.load() == [HighScoreEntry(score=42, date="2024-01-02 03:04:05")]
    assert json.loads(store.get(SCORES_KEY)) == [{"score": 42, "date": "2024-01-02 03:04:05"}]


def test_table_keeps_top_five_descending():
    table = HighScoreTable(MemoryStore(), now=_fixed_now)
    for score in [50, 10, 40, 30, 20]:
        table.record_score(score)
    assert [e.score for e in table.load()] == [50, 40, 30, 20, 10]

    # A sixth, lower score does not make the cut
    table.record_score(5)
    assert [e.score for e in table.load()] == [50, 40, 30, 20, 10]

    # A higher one pushes out the lowest
    table.record_score(60)
    scores = [e.score for e in table.load()]
    assert scores == [60, 50, 40, 30, 20]
    assert all(a > b for a, b in zip(scores, scores[1:]))


def test_negative_scores_are_recorded():
    table = HighScoreTable(MemoryStore(), now=_fixed_now)
    table.record_score(-40)
    table.record_score(0)
    assert [e.score for e in table.load()] == [0, -40]


@pytest.mark.parametrize("payload", ["not json", "{}", '{"score": 1}', '[{"date": "x"}]', '[{"score": "abc"}]', "[1, 2]"])
def test_corrupt_payload_reads_as_empty(payload, caplog):
    table = HighScoreTable(MemoryStore({SCORES_KEY: payload}), now=_fixed_now)
    with caplog.at_level(logging.WARNING):
        assert table.load() == []
    assert "corrupt" in caplog.text.lower()
    # Recording replaces the unusable payload
    assert table.record_score(7) is True
    assert [e.score for e in table.load()] == [7]


def test_empty_store_reads_as_empty():
    assert HighScoreTable(MemoryStore()).load() == []
    assert HighScoreTable(MemoryStore({SCORES_KEY: ""})).load() == []


class _ReadOnlyStore(MemoryStore):
    def set(self, key, value):
        raise StorageError("read-only")


def test_write_failure_returns_false(caplog):
    table = HighScoreTable(_ReadOnlyStore(), now=_fixed_now)
    with caplog.at_level(logging.WARNING):
        assert table.record_score(10) is False
    assert "Could not save score 10" in caplog.text


def test_json_file_store_persists_across_instances(tmp_path: Path):
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("a", "1")
    JsonFileStore(path).set("b", "2")
    store = JsonFileStore(path)
    assert store.get("a") == "1"
    assert store.get("b") == "2"
    assert store.get("missing") is None
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1", "b": "2"}


def test_json_file_store_missing_file_is_empty(tmp_path: Path):
    assert JsonFileStore(tmp_path / "none.json").get("a") is None


def test_json_file_store_recovers_from_backup(tmp_path: Path):
    path = tmp_path / "store.json"
    store = JsonFileStore(path)
    store.set("a", "1")
    store.set("a", "2")
    assert store.backup_path.exists()

    path.write_text("{ this is not valid json ", encoding="utf-8")
    assert store.get("a") == "1"


def test_json_file_store_corruption_without_backup_raises(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonFileStore(path).get("a")


def test_table_over_corrupt_file_store_is_empty_then_rewritten(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("garbage", encoding="utf-8")
    table = HighScoreTable(JsonFileStore(path), now=_fixed_now)
    assert table.load() == []
    assert table.record_score(15) is True
    assert [e.score for e in HighScoreTable(JsonFileStore(path)).load()] == [15]


class _UnreadableStore(MemoryStore):
    def get(self, key):
        raise PermissionError("permission denied")


def test_os_error_on_read_is_a_warning(caplog):
    table = HighScoreTable(_UnreadableStore(), now=_fixed_now)
    with caplog.at_level(logging.WARNING):
        assert table.load() == []
        assert table.record_score(12) is True
    assert "Could not read high scores" in caplog.text
