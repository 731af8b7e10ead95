# src/duke/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskKind(StrEnum):
    """
    Task variant tag.

    The value is what gets stored on disk; the marker is what users see.
    """

    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"

    @property
    def marker(self) -> str:
        match self:
            case TaskKind.TODO:
                return "T"
            case TaskKind.DEADLINE:
                return "D"
            case TaskKind.EVENT:
                return "E"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskKind | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(slots=True)
class Task:
    """
    A unit of trackable work.

    `label` carries the kind-specific field: the "by" label of a deadline or
    the "at" label of an event. Labels are opaque and never parsed as dates.
    """

    kind: TaskKind
    description: str
    done: bool = False
    label: str | None = None

    @classmethod
    def todo(cls, description: str) -> Task:
        return cls(kind=TaskKind.TODO, description=description)

    @classmethod
    def deadline(cls, description: str, by: str) -> Task:
        return cls(kind=TaskKind.DEADLINE, description=description, label=by)

    @classmethod
    def event(cls, description: str, at: str) -> Task:
        return cls(kind=TaskKind.EVENT, description=description, label=at)

    @property
    def by(self) -> str | None:
        return self.label if self.kind is TaskKind.DEADLINE else None

    @property
    def at(self) -> str | None:
        return self.label if self.kind is TaskKind.EVENT else None

    def mark_as_done(self) -> None:
        self.done = True

    def render(self) -> str:
        status = "X" if self.done else " "
        base = f"[{self.kind.marker}][{status}] {self.description}"
        match self.kind:
            case TaskKind.DEADLINE:
                return f"{base} (by: {self.label})"
            case TaskKind.EVENT:
                return f"{base} (at: {self.label})"
            case _:
                return base

    def __str__(self) -> str:
        return self.render()
