# tests/test_bootstrap.py

from __future__ import annotations

import builtins
import logging

from duke.cli import main as cli_main
from duke.cli.bootstrap import create_initial_state
from duke.cli.commands import handle_input


def test_state_survives_restart(settings) -> None:
    first = create_initial_state(settings=settings)
    handle_input(first, "todo read book")
    handle_input(first, "deadline essay /by fri")

    second = create_initial_state(settings=settings)
    assert handle_input(second, "ls") == (
        "Here are the tasks in your list:\n"
        "1. [T][ ] read book\n"
        "2. [D][ ] essay (by: fri)\n"
        "You now have 2 tasks in the list."
    )


def test_main_exits_cleanly(settings, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    lines = iter(["todo x", "exit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))

    try:
        assert cli_main.main() == 0
    finally:
        # setup_logging installed handlers on the root logger; drop them again.
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

    out = capsys.readouterr().out
    assert "Got it. I've added this task:" in out
    assert out.rstrip().endswith("Bye. Hope to see you again soon!")
    assert (settings.data_dir / "duke.log").exists()
