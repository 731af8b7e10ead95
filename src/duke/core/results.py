# src/duke/core/results.py

"""
Handler results.

Handlers never raise for bad input; they return either a Reply or a Failure,
and the interpreter renders both the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FailureKind(StrEnum):
    MISSING_ARGUMENT = "missing_argument"
    MALFORMED_NUMBER = "malformed_number"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    MISSING_SEPARATOR = "missing_separator"
    DUPLICATE_SEPARATOR = "duplicate_separator"
    UNRECOGNISED_COMMAND = "unrecognised_command"
    INTERNAL = "internal"


@dataclass(frozen=True, slots=True)
class Reply:
    text: str
    exit: bool = False


@dataclass(frozen=True, slots=True)
class Failure:
    kind: FailureKind
    message: str


CommandResult = Reply | Failure


def render_result(result: CommandResult) -> str:
    match result:
        case Failure(message=message):
            return f"ERROR: {message}"
        case Reply(text=text):
            return text
    raise TypeError(f"not a command result: {result!r}")
