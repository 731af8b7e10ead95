# tests/test_task_list.py

from __future__ import annotations

import pytest

from duke.tasks.task_list import TaskIndexError, TaskList
from duke.tasks.task_models import Task

from .fakes import FakeTaskRepo


def test_absent_snapshot_starts_empty() -> None:
    repo = FakeTaskRepo(None)
    tasks = TaskList(repo)
    assert tasks.size() == 0
    assert tasks.load_all() == []


def test_append_persists_whole_list() -> None:
    repo = FakeTaskRepo([Task.todo("a")])
    tasks = TaskList(repo)

    tasks.append(Task.todo("b"))

    assert len(tasks) == 2
    assert [t.description for t in repo.saved] == ["a", "b"]


def test_append_kept_when_write_fails() -> None:
    repo = FakeTaskRepo([], fail_writes=True)
    tasks = TaskList(repo)

    tasks.append(Task.todo("a"))

    assert tasks.size() == 1
    assert repo.saved == []


def test_get_by_index_reloads_first() -> None:
    repo = FakeTaskRepo([Task.todo("a")])
    tasks = TaskList(repo)
    repo.saved = [Task.todo("x"), Task.todo("y")]

    assert tasks.get_by_index(1).description == "y"
    assert tasks.size() == 2


@pytest.mark.parametrize("index", [-1, 1, 5])
def test_get_by_index_out_of_range(index: int) -> None:
    tasks = TaskList(FakeTaskRepo([Task.todo("a")]))
    with pytest.raises(TaskIndexError):
        tasks.get_by_index(index)


def test_remove_by_index_does_not_reload() -> None:
    repo = FakeTaskRepo([Task.todo("a"), Task.todo("b")])
    tasks = TaskList(repo)
    reads_before = repo.reads
    repo.saved = [Task.todo("x")]

    removed = tasks.remove_by_index(1)

    assert removed.description == "b"
    assert repo.reads == reads_before
    # The stale in-memory list overwrites the saved one.
    assert [t.description for t in repo.saved] == ["a"]


def test_remove_by_index_out_of_range_keeps_list() -> None:
    repo = FakeTaskRepo([Task.todo("a")])
    tasks = TaskList(repo)
    with pytest.raises(TaskIndexError):
        tasks.remove_by_index(-1)
    assert tasks.size() == 1
    assert repo.writes == 0


def test_mark_done_persists_flag() -> None:
    repo = FakeTaskRepo([Task.todo("a"), Task.event("b", "noon")])
    tasks = TaskList(repo)

    task = tasks.mark_done(1)

    assert task.done is True
    assert repo.saved[1].done is True
    assert tasks.get_by_index(1).done is True
