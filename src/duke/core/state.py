# src/duke/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_list import TaskList


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: object

    tasks: TaskList
