import json

import pytest

from boxtracker.storage.store import JsonFileStore, MemoryStore


def test_memory_store():
    s = MemoryStore({"a": "1"})
    assert s.get("a") == "1" and s.get("b") is None
    s.set("b", "2")
    s.remove("a")
    s.remove("missing")
    assert s.keys() == ["b"]


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "state.json"
    s = JsonFileStore(path)
    assert s.get("sbt_pools") is None
    s.set("sbt_pools", "[]")
    s.set("sbt_score", '{"teamA": 3, "teamB": 0}')
    assert JsonFileStore(path).get("sbt_score") == '{"teamA": 3, "teamB": 0}'
    s.remove("sbt_pools")
    assert json.loads(path.read_text()) == {"sbt_score": '{"teamA": 3, "teamB": 0}'}


def test_json_file_store_rejects_non_object(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        JsonFileStore(path).get("x")
