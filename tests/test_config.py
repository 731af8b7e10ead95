# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from duke.config import Settings

_VARS = ("DUKE_APP_NAME", "DUKE_LOG_LEVEL", "DUKE_PROMPT", "DUKE_DATA_DIR", "DUKE_TASKS_DB_PATH")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "duke"
    assert s.log_level == "WARNING"
    assert s.prompt == "$ "
    assert s.data_dir == Path(".local/duke")
    assert s.tasks_db_path == Path(".local/duke/tasks.sqlite3")


def test_db_path_follows_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DUKE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DUKE_LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.log_level == "DEBUG"


def test_explicit_db_path_and_blank_values(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DUKE_TASKS_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("DUKE_APP_NAME", "   ")
    monkeypatch.setenv("DUKE_PROMPT", "> ")
    s = Settings.from_env()
    assert s.tasks_db_path == tmp_path / "x.db"
    assert s.app_name == "duke"
    assert s.prompt == "> "
