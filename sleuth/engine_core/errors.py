"""
Errors and result codes shared by the registry, the clue parser and the console.

Parse failures are terminal for a single clue: no partial constraint is
ever returned. Negative deduction outcomes (a clue with two unresolved
leaves, or none) are NOT errors and live in constraint.Solvable.
"""

from __future__ import annotations
from enum import Enum


class ProcessResult(Enum):
    """Outcome codes for a processed command or clue."""
    NEXT = "next"  # Nothing to do (incomplete input)
    SUCCESS = "success"

    INVALID_SECTION = "invalid_section"
    INVALID_INDEX = "invalid_index"
    INVALID_STATE = "invalid_state"
    INVALID_CONSTRAINT = "invalid_constraint"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @property
    def is_error(self) -> bool:
        return self not in {ProcessResult.NEXT, ProcessResult.SUCCESS}

    def __str__(self) -> str:
        return self.message


_MESSAGES = {
    ProcessResult.NEXT: "Next",
    ProcessResult.SUCCESS: "Success",
    ProcessResult.INVALID_SECTION: "Invalid section",
    ProcessResult.INVALID_INDEX: "Invalid index",
    ProcessResult.INVALID_STATE: "Invalid state",
    ProcessResult.INVALID_CONSTRAINT: "Invalid constraint",
}

PARSE_ERRORS = frozenset({
    ProcessResult.INVALID_SECTION,
    ProcessResult.INVALID_INDEX,
    ProcessResult.INVALID_CONSTRAINT,
})


class ConstraintParseError(Exception):
    """Raised when a clue string cannot be turned into a Constraint."""

    def __init__(self, result: ProcessResult, raw: str | None = None):
        if result not in PARSE_ERRORS:
            raise ValueError(f"{result!r} is not a parse error")
        self.result = result
        self.raw = raw
        super().__init__(result.message)


class InvariantViolation(RuntimeError):
    """
    Internal consistency failure in the deduction engine.

    Never a user-facing error: reaching this means the tree builder or the
    leaf flattening produced something the evaluator cannot handle.
    """


class RegistryLoadError(Exception):
    """Raised when an element file cannot be read or is missing a section."""
