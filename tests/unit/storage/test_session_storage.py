"""
Tests unitaires pour le stockage optionnel des sessions.
"""
import logging
import sqlite3

import pytest

from llm_toolkit.storage.sessions import SessionStorage


@pytest.fixture
def storage(tmp_path):
    return SessionStorage(enabled=True, prefix="test:", path=str(tmp_path / "sessions.db"))


def test_set_get_remove(storage):
    storage.set("a", '{"x": 1}')
    assert storage.get("a") == '{"x": 1}'

    storage.set("a", "v2")
    assert storage.get("a") == "v2"

    storage.remove("a")
    assert storage.get("a") is None


def test_keys_are_prefixed(storage):
    storage.set("session-1", "data")

    conn = sqlite3.connect(storage.path)
    try:
        keys = [row[0] for row in conn.execute("SELECT key FROM kv_store")]
    finally:
        conn.close()

    assert keys == ["test:session-1"]


def test_missing_key(storage):
    assert storage.get("absent") is None


def test_disabled_is_noop(tmp_path):
    path = tmp_path / "jamais.db"
    storage = SessionStorage(enabled=False, path=str(path))

    storage.set("a", "b")
    storage.remove("a")

    assert storage.get("a") is None
    assert not path.exists()


def test_errors_are_contained(tmp_path, caplog):
    """Une base inaccessible est loggée, jamais propagée."""
    storage = SessionStorage(enabled=True, path=str(tmp_path))  # un répertoire

    with caplog.at_level(logging.WARNING, logger="llm_toolkit.storage.sessions"):
        storage.set("a", "b")
        assert storage.get("a") is None
        storage.remove("a")

    assert caplog.text.count("[STORAGE]") == 3
