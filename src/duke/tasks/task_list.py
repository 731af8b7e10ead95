# src/duke/tasks/task_list.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskIndexError(IndexError):
    """A task position outside the current list bounds."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"task index {index} out of range for {size} tasks")
        self.index = index
        self.size = size


class TaskList:
    """
    In-memory task sequence kept in step with a TaskRepo snapshot.

    Consistency rules:
    - every mutation writes the whole sequence back (best-effort, no rollback)
    - lookups by index reload from the repo first
    - removal works on the current in-memory sequence without reloading

    The last rule means a remove can act on a stale list if the repo changed
    underneath us. Callers rely on this behaving exactly as described.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo
        self._items: list[Task] = self.load_all()
        logger.debug("TaskList initialised with %d tasks", len(self._items))

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._items)

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    # ---- sync ----

    def load_all(self) -> list[Task]:
        saved = self._repo.read_all()
        if saved is None:
            logger.debug("No saved task list; starting empty.")
            return []
        return list(saved)

    def reload(self) -> list[Task]:
        self._items = self.load_all()
        return self._items

    def _persist(self) -> bool:
        ok = self._repo.write_all(list(self._items))
        if not ok:
            logger.warning("Task list write failed; in-memory state kept (%d tasks).", len(self._items))
        return ok

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._items):
            raise TaskIndexError(index, len(self._items))

    # ---- mutations / lookups ----

    def append(self, task: Task) -> None:
        self._items.append(task)
        self._persist()

    def get_by_index(self, index: int) -> Task:
        self.reload()
        self._check_index(index)
        return self._items[index]

    def remove_by_index(self, index: int) -> Task:
        self._check_index(index)
        task = self._items.pop(index)
        self._persist()
        return task

    def mark_done(self, index: int) -> Task:
        task = self.get_by_index(index)
        task.mark_as_done()
        self._persist()
        return task
