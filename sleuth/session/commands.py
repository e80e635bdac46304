"""
Console Commands - Dispatches one line of player input.

Commands:
    l2c / w1x / p3u      Set an element confirmed / dismissed / unknown
    w1 | l3 | p5         Record a clue
    rm <n> / del <n>     Remove clue n (1-based, insertion order)
    clear                Remove all clues
    apply                Write every forced suggestion into the registry
    apply <element>      Write one forced suggestion (e.g. "apply l3")

Parse errors reject the command; they are recorded in the history with
their message. Incomplete input (NEXT) is neither an error nor recorded.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging

from ..engine_core.constraint import Constraint
from ..engine_core.element import ElementIdentifier
from ..engine_core.errors import ConstraintParseError, ProcessResult
from .manager import HistoryEntry

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class CommandType(Enum):
    """Kinds of console commands."""
    SET_ELEMENT = "set_element"
    ADD_CONSTRAINT = "add_constraint"
    REMOVE_CONSTRAINT = "remove_constraint"
    CLEAR_CONSTRAINTS = "clear_constraints"
    APPLY = "apply"


@dataclass
class CommandResult:
    """
    Result of executing a console command.

    Mirrors the registry's ProcessResult codes for element and clue
    commands; error_code is the upper-case code name on failure.
    """
    success: bool
    command_type: CommandType | None = None
    error: str | None = None
    error_code: str | None = None

    constraint: Constraint | None = None
    applied: list[str] = field(default_factory=list)
    recorded: bool = True

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str,
        command_type: CommandType | None = None,
    ) -> CommandResult:
        return cls(success=False, command_type=command_type, error=error, error_code=error_code)

    @classmethod
    def from_process_result(cls, result: ProcessResult, command_type: CommandType) -> CommandResult:
        if result.is_error:
            return cls.failure(result.message, result.name, command_type)
        return cls(
            success=True,
            command_type=command_type,
            recorded=result != ProcessResult.NEXT,
        )


def execute_command(session: Session, line: str) -> CommandResult:
    """Execute one console line against a session and record it."""
    command = line.strip()
    result = _dispatch(session, command)

    if result.recorded and command:
        session.command_history.append(
            HistoryEntry(command=command, error=None if result.success else result.error)
        )
    if not result.success:
        logger.warning("Rejected command %r: %s", command, result.error)
    return result


def _dispatch(session: Session, command: str) -> CommandResult:
    if not command:
        return CommandResult(success=True, recorded=False)

    words = command.split()
    keyword = words[0].lower()

    if keyword in ("rm", "del"):
        return _remove_constraint(session, words[1:])
    if keyword == "clear" and len(words) == 1:
        session.clear_constraints()
        return CommandResult(success=True, command_type=CommandType.CLEAR_CONSTRAINTS)
    if keyword == "apply":
        return _apply(session, words[1:])
    if "|" in command:
        return _add_constraint(session, command)

    result = session.process_action(command)
    return CommandResult.from_process_result(result, CommandType.SET_ELEMENT)


def _add_constraint(session: Session, command: str) -> CommandResult:
    try:
        constraint = Constraint.parse(command)
    except ConstraintParseError as e:
        return CommandResult.failure(e.result.message, e.result.name, CommandType.ADD_CONSTRAINT)

    session.add_constraint(constraint)
    return CommandResult(
        success=True,
        command_type=CommandType.ADD_CONSTRAINT,
        constraint=constraint,
    )


def _remove_constraint(session: Session, args: list[str]) -> CommandResult:
    if len(args) != 1 or not args[0].isdigit():
        return CommandResult.failure(
            "Invalid constraint index", "INVALID_COMMAND", CommandType.REMOVE_CONSTRAINT
        )

    removed = session.remove_constraint(int(args[0]))
    if removed is None:
        return CommandResult.failure(
            "Invalid constraint index", "INVALID_COMMAND", CommandType.REMOVE_CONSTRAINT
        )
    return CommandResult(
        success=True,
        command_type=CommandType.REMOVE_CONSTRAINT,
        constraint=removed,
    )


def _apply(session: Session, args: list[str]) -> CommandResult:
    if not args:
        applied = session.apply_all_suggestions()
        return CommandResult(
            success=True,
            command_type=CommandType.APPLY,
            applied=[str(identifier) for identifier, _ in applied],
        )

    if len(args) != 1:
        return CommandResult.failure("Invalid command", "INVALID_COMMAND", CommandType.APPLY)

    identifier = ElementIdentifier.parse(args[0])
    if identifier is None:
        return CommandResult.failure(
            ProcessResult.INVALID_INDEX.message, ProcessResult.INVALID_INDEX.name, CommandType.APPLY
        )

    if session.apply_suggestion(identifier) is None:
        return CommandResult.failure(
            f"No suggestion for {identifier}", "NO_SUGGESTION", CommandType.APPLY
        )
    return CommandResult(success=True, command_type=CommandType.APPLY, applied=[str(identifier)])

