# src/duke/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum

from ..core.results import CommandResult, Failure, FailureKind, Reply, render_result
from ..core.state import AppState
from ..tasks.task_list import TaskIndexError
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, str, list[str]], CommandResult]

logger = logging.getLogger(__name__)

_TASK_NO_RE = re.compile(r"[+-]?[0-9]+")
_TASK_NO_MIN, _TASK_NO_MAX = -(2**31), 2**31 - 1


class CommandKind(StrEnum):
    EXIT = "exit"
    ADD_TODO = "add_todo"
    ADD_DEADLINE = "add_deadline"
    ADD_EVENT = "add_event"
    FIND = "find"
    DELETE = "delete"
    MARK_DONE = "mark_done"
    LIST = "list"
    UNRECOGNISED = "unrecognised"


def tokenize(line: str) -> list[str]:
    """
    Split on single spaces; trailing empty tokens are dropped.

    So "todo " is a single token, while "todo  x" keeps the empty middle token.
    """
    tokens = line.split(" ")
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


class CommandRegistry:
    """Keyword table + handlers for the line interpreter (todo, ls, done, ...)."""

    def __init__(self) -> None:
        self._kinds: dict[str, CommandKind] = {}
        self._handlers: dict[CommandKind, CommandHandler] = {}

    def register(
        self,
        kind: CommandKind,
        handler: CommandHandler,
        keywords: Iterable[str] = (),
    ) -> None:
        self._handlers[kind] = handler
        for keyword in keywords:
            # Keywords are matched exactly (case-sensitive).
            self._kinds[keyword] = kind

    def classify(self, keyword: str) -> CommandKind:
        return self._kinds.get(keyword, CommandKind.UNRECOGNISED)

    def handle(self, state: AppState, line: str) -> CommandResult:
        """
        Run one input line.
        Always returns a result; handler crashes are logged and reported.
        """
        tokens = tokenize(line)
        keyword = tokens[0] if tokens else ""
        kind = self.classify(keyword)

        handler = self._handlers.get(kind)
        if handler is None:
            return _unrecognised()

        logger.debug("Dispatch kind=%s keyword=%r", kind, keyword)
        try:
            return handler(state, line, tokens)
        except Exception:
            logger.exception("Command handler crashed (kind=%s).", kind)
            return Failure(FailureKind.INTERNAL, "Internal error while handling a command.")


registry = CommandRegistry()


def handle_input(state: AppState, text: str) -> str:
    """Entry point for front ends: one raw line in, display text out."""
    return render_result(registry.handle(state, text))


# ---- helpers ----


def _count_line(state: AppState) -> str:
    return f"You now have {state.tasks.size()} tasks in the list."


def _added(state: AppState, task: Task) -> Reply:
    return Reply(f"Got it. I've added this task:\n{task}\n{_count_line(state)}")


def _unrecognised() -> Failure:
    return Failure(FailureKind.UNRECOGNISED_COMMAND, "Unrecognised command. Did you make a typo?")


def _task_not_found() -> Failure:
    return Failure(FailureKind.INDEX_OUT_OF_RANGE, "Task no. not found. Does that task exist?")


def _parse_task_no(tokens: list[str], action: str) -> int | Failure:
    if len(tokens) < 2:
        return Failure(
            FailureKind.MISSING_ARGUMENT,
            "No task no. found. "
            f"Did you input the task no. of the task you'd like to {action}?",
        )
    raw = tokens[1]
    # Numbers outside 32-bit int range are malformed, not out of range.
    if not _TASK_NO_RE.fullmatch(raw) or not _TASK_NO_MIN <= int(raw) <= _TASK_NO_MAX:
        return Failure(
            FailureKind.MALFORMED_NUMBER,
            f"Unrecognized task. Please input the task no. of the task you'd like to {action}.",
        )
    return int(raw)


@dataclass(frozen=True, slots=True)
class _LabelledTaskSyntax:
    """How one labelled task type is spelled on the command line."""

    noun: str
    prefix: str
    separator: str
    missing_message: str
    multiple_message: str
    build: Callable[[str, str], Task]


_DEADLINE_SYNTAX = _LabelledTaskSyntax(
    noun="deadline",
    prefix="deadline ",
    separator=" /by ",
    missing_message="Deadline not found. Did you input a deadline with `/by`?",
    multiple_message="Multiple deadlines found. Please only input one deadline.",
    build=Task.deadline,
)

_EVENT_SYNTAX = _LabelledTaskSyntax(
    noun="event",
    prefix="event ",
    separator=" /at ",
    missing_message="Date/time not found. Did you input a date/time with `/at`?",
    multiple_message="Multiple date/times found. Please only input one date/time.",
    build=Task.event,
)


def _add_labelled(
    state: AppState, line: str, tokens: list[str], syntax: _LabelledTaskSyntax
) -> CommandResult:
    if len(tokens) < 2:
        return Failure(
            FailureKind.MISSING_ARGUMENT,
            f"Description of {syntax.noun} cannot be empty.",
        )

    parts = line.replace(syntax.prefix, "", 1).split(syntax.separator)
    if len(parts) < 2:
        return Failure(FailureKind.MISSING_SEPARATOR, syntax.missing_message)
    if len(parts) > 2:
        return Failure(FailureKind.DUPLICATE_SEPARATOR, syntax.multiple_message)

    description, label = parts
    task = syntax.build(description, label)
    state.tasks.append(task)
    return _added(state, task)


# ---- handlers ----


def cmd_exit(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    return Reply("Bye. Hope to see you again soon!", exit=True)


def cmd_todo(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    if len(tokens) < 2:
        return Failure(FailureKind.MISSING_ARGUMENT, "Description of todo cannot be empty.")

    task = Task.todo(line.replace("todo ", "", 1))
    state.tasks.append(task)
    return _added(state, task)


def cmd_deadline(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    """deadline <description> /by <label>"""
    return _add_labelled(state, line, tokens, _DEADLINE_SYNTAX)


def cmd_event(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    """event <description> /at <label>"""
    return _add_labelled(state, line, tokens, _EVENT_SYNTAX)


def cmd_find(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    """
    find <term>  -> case-insensitive substring match on descriptions.

    Results are numbered from 1 within the match list, not by list position.
    """
    if len(tokens) < 2:
        return Failure(
            FailureKind.MISSING_ARGUMENT,
            "Search term not found. Did you type a search term?",
        )

    term = line.replace("find ", "", 1).lower()
    state.tasks.reload()
    found = [t for t in state.tasks.tasks if term in t.description.lower()]

    if not found:
        return Reply(
            "No task matching your search term was found. Perhaps try another search term?"
        )

    lines = ["Here are the matching tasks in your list:"]
    for i, task in enumerate(found, start=1):
        lines.append(f"{i}. {task}")
    return Reply("\n".join(lines))


def cmd_delete(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    task_no = _parse_task_no(tokens, "delete")
    if isinstance(task_no, Failure):
        return task_no

    try:
        task = state.tasks.remove_by_index(task_no - 1)
    except TaskIndexError:
        return _task_not_found()

    return Reply(f"Noted. I've removed this task:\n{task_no}. {task}\n{_count_line(state)}")


def cmd_done(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    task_no = _parse_task_no(tokens, "mark as done")
    if isinstance(task_no, Failure):
        return task_no

    try:
        task = state.tasks.mark_done(task_no - 1)
    except TaskIndexError:
        return _task_not_found()

    return Reply(f"Nice! I've marked this task as done:\n{task_no}. {task}")


def cmd_list(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    if state.tasks.size() == 0:
        return Reply("No tasks found. Start adding your first few tasks!")

    lines = ["Here are the tasks in your list:"]
    index = 0
    while index < state.tasks.size():
        try:
            task = state.tasks.get_by_index(index)
        except TaskIndexError:
            # Saved copy is shorter than the in-memory one.
            break
        lines.append(f"{index + 1}. {task}")
        index += 1
    lines.append(_count_line(state))
    return Reply("\n".join(lines))


def cmd_unrecognised(state: AppState, line: str, tokens: list[str]) -> CommandResult:
    return _unrecognised()


registry.register(CommandKind.EXIT, cmd_exit, keywords=["bye", "exit"])
registry.register(CommandKind.ADD_TODO, cmd_todo, keywords=["todo"])
registry.register(CommandKind.ADD_DEADLINE, cmd_deadline, keywords=["deadline"])
registry.register(CommandKind.ADD_EVENT, cmd_event, keywords=["event"])
registry.register(CommandKind.FIND, cmd_find, keywords=["find"])
registry.register(CommandKind.DELETE, cmd_delete, keywords=["rm", "delete"])
registry.register(CommandKind.MARK_DONE, cmd_done, keywords=["done"])
registry.register(CommandKind.LIST, cmd_list, keywords=["ls"])
registry.register(CommandKind.UNRECOGNISED, cmd_unrecognised)
