from __future__ import annotations

import logging
import sqlite3

import pytest

from josh_sqlite.errors import SerializationError, StoreClosedError, TypeMismatchError
from josh_sqlite.table import BATCH_CHUNK_SIZE, SqliteKeyValueTable


@pytest.fixture
def table(tmp_path):
    t = SqliteKeyValueTable(tmp_path / "josh.sqlite", "things")
    t.open()
    yield t
    t.close()


def test_open_creates_table_and_applies_pragmas(tmp_path):
    t = SqliteKeyValueTable(tmp_path / "josh.sqlite", "things")
    assert t.open() is True
    try:
        conn = sqlite3.connect(str(tmp_path / "josh.sqlite"))
        cols = [(r[1], r[2].lower(), r[5]) for r in conn.execute('PRAGMA table_info("things")')]
        assert cols == [("key", "text", 1), ("value", "text", 0)]
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        conn.close()
        assert t._db().execute("PRAGMA synchronous").fetchone()[0] == 1
    finally:
        t.close()


def test_open_existing_table_keeps_rows(tmp_path):
    first = SqliteKeyValueTable(tmp_path / "josh.sqlite", "things")
    first.open()
    first.set("a", {"x": 1})
    first.close()

    second = SqliteKeyValueTable(tmp_path / "josh.sqlite", "things")
    assert second.open() is False
    try:
        assert second.get("a").value == {"x": 1}
    finally:
        second.close()


def test_numeric_table_name_is_quoted(tmp_path):
    t = SqliteKeyValueTable(tmp_path / "josh.sqlite", "123")
    assert t.open() is True
    t.set("k", 1)
    assert t.count() == 1
    t.close()


def test_open_missing_directory_raises_engine_error(tmp_path):
    t = SqliteKeyValueTable(tmp_path / "nope" / "josh.sqlite", "things")
    with pytest.raises(sqlite3.OperationalError):
        t.open()
    assert t.is_open is False


def test_get_missing_returns_absent_lookup(table):
    lookup = table.get("missing")
    assert lookup.found is False
    assert lookup.key == "missing"
    assert lookup.value_or("fallback") == "fallback"


def test_set_upserts(table):
    table.set("k", "v1")
    table.set("k", "v2")
    assert table.get("k").unwrap() == "v2"
    assert table.count() == 1


def test_numeric_keys_are_stored_as_strings(table):
    table.set(1, "one")
    table.set(2.5, "two and a half")
    assert sorted(table.keys()) == ["1", "2.5"]
    assert table.get(1).value == "one"
    assert table.get("1").value == "one"


def test_set_rejects_bad_key_and_value_without_writing(table):
    with pytest.raises(TypeMismatchError):
        table.set(None, "x")
    with pytest.raises(SerializationError):
        table.set("k", {1, 2})
    assert table.count() == 0


def test_get_many_omits_missing_and_chunks(table):
    total = BATCH_CHUNK_SIZE + 7
    for i in range(total):
        table.set(i, i * 2)
    wanted = list(range(total)) + ["nope"]
    rows = table.get_many(wanted)
    assert len(rows) == total
    assert dict(rows)["3"] == 6
    assert table.get_many([]) == []


def test_delete_clear_and_has(table):
    table.set("a", 1)
    table.set("b", 2)
    assert table.has("a") is True

    table.delete("a")
    table.delete("never-there")
    assert table.has("a") is False
    assert table.keys() == ["b"]

    table.clear()
    assert table.count() == 0
    table.set("c", 3)
    assert table.count() == 1


def test_sql_debug_logging(tmp_path, caplog):
    t = SqliteKeyValueTable(tmp_path / "josh.sqlite", "things", log_sql=True)
    with caplog.at_level(logging.DEBUG, logger="josh_sqlite.table"):
        t.open()
        t.count()
    t.close()
    assert any("SELECT count(*)" in r.getMessage() for r in caplog.records)
    assert any("created table things" in r.getMessage() for r in caplog.records)


def test_closed_table_raises(tmp_path):
    t = SqliteKeyValueTable(tmp_path / "josh.sqlite", "things")
    t.open()
    t.close()
    t.close()
    with pytest.raises(StoreClosedError):
        t.count()


def test_open_existing_table_does_not_reapply_pragmas(tmp_path):
    path = tmp_path / "josh.sqlite"
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE things (key text PRIMARY KEY, value text)")
    conn.commit()
    default_sync = conn.execute("PRAGMA synchronous").fetchone()[0]
    conn.close()

    t = SqliteKeyValueTable(path, "things")
    assert t.open() is False
    try:
        assert t._db().execute("PRAGMA synchronous").fetchone()[0] == default_sync
        assert t._db().execute("PRAGMA journal_mode").fetchone()[0] == "delete"
    finally:
        t.close()


def test_clear_keeps_table_and_pragmas(table):
    table.set("a", 1)
    table.clear()

    db = table._db()
    assert db.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
    assert db.execute("PRAGMA synchronous").fetchone()[0] == 1
    names = [r[0] for r in db.execute("SELECT name FROM sqlite_master WHERE type='table'")]
    assert names == ["things"]
