"""Unit tests for the command-line entrypoint."""
import json
from pathlib import Path

import pytest

from docrag import cli


@pytest.fixture(autouse=True)
def fake_service(monkeypatch: pytest.MonkeyPatch, service):
    monkeypatch.setattr(cli, "get_service", lambda: service)
    return service


def test_load_and_ask_print_json(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    (tmp_path / "a.txt").write_text("some text", encoding="utf-8")

    assert cli.main(["load", str(tmp_path)]) == 0
    loaded = json.loads(capsys.readouterr().out)
    assert loaded["loadedFiles"] == 1
    assert loaded["loadedChunks"] == 1

    assert cli.main(["--log-level", "DEBUG", "ask", "what text?", "--top-k", "50"]) == 0
    answered = json.loads(capsys.readouterr().out)
    assert answered == {"answer": "fake answer", "sources": ["a.txt"], "matchedChunks": 1}


def test_invalid_input_exits_with_status_1(capsys: pytest.CaptureFixture) -> None:
    assert cli.main(["ask", "anything?"]) == 1
    assert capsys.readouterr().out == ""


def test_init_db(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(cli, "init_db", lambda: calls.append(True))
    assert cli.main(["init-db"]) == 0
    assert calls == [True]


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        cli.main([])
