# src/duke/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task list depends on a Protocol instead of the SQLite store so the
persistence backend stays swappable and tests can use in-memory fakes.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Durable full-list snapshot of the task sequence."""

    def read_all(self) -> list[Task] | None:
        """Return the saved sequence, or None if nothing was ever saved."""
        ...

    def write_all(self, tasks: Sequence[Task]) -> bool:
        """Replace the saved sequence; False if the write failed."""
        ...
