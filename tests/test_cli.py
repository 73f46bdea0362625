import argparse
import json

import pytest

from boxtracker.cli import main, parse_pair


def run(tmp_path, *argv):
    return main(["--store", str(tmp_path / "state.json"), *argv])


def test_parse_pair():
    assert parse_pair("4-4") == (4, 4)
    assert parse_pair("1,7") == (1, 7)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_pair("12-3")


def test_add_score_status(tmp_path, capsys):
    assert run(tmp_path, "teams", "Chiefs", "Eagles") == 0
    assert run(tmp_path, "add", "4-4", "8-4", "--notes", "Q1 $50") == 0
    assert run(tmp_path, "score", "teamA", "21") == 0
    assert run(tmp_path, "score", "teamB", "14") == 0
    out = capsys.readouterr().out
    assert "Chiefs 21 - 14 Eagles" in out
    assert "CLOSE Chiefs FG, Chiefs TD" in out
    assert "Q1 $50" in out


def test_share_then_import(tmp_path, capsys):
    run(tmp_path, "teams", "Chiefs", "Eagles")
    run(tmp_path, "add", "3-0")
    capsys.readouterr()
    assert run(tmp_path, "share", "--base-url", "https://squares.example/", "--projection", "full") == 0
    url = capsys.readouterr().out.strip()
    assert url.startswith("https://squares.example/?data=")

    other = tmp_path / "other"
    assert main(["--store", str(other / "state.json"), "import", url]) == 0
    stored = json.loads((other / "state.json").read_text())
    assert json.loads(stored["sbt_teams"]) == {"main": {"teamA": "Chiefs", "teamB": "Eagles"}}


def test_errors_exit_nonzero(tmp_path):
    assert run(tmp_path, "delete", "ghost") == 1
    assert run(tmp_path, "score", "teamA", "-3") == 2


def test_reset(tmp_path, capsys):
    run(tmp_path, "add", "1-1")
    assert run(tmp_path, "reset") == 0
    run(tmp_path, "status")
    assert "no pools" in capsys.readouterr().out
