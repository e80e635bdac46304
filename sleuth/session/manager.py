"""
Session Manager - Creates and manages solver sessions.

A session is one game's worth of notes:
- The element registry (authoritative knowledge)
- The clues the player has recorded
- The advisory cache derived from those clues
- The console command history

LIFECYCLE:
1. Player starts a session (built-in board or custom element file)
2. Each input: execute_command() then refresh_constraints()
3. Game ends: session is dropped, nothing is persisted

CONCURRENCY:
Registry mutation and snapshotting share one lock, so a refresh always
evaluates a fully-formed snapshot. Evaluation itself runs outside the
lock on that snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging
import threading
import time
import uuid

from ..engine_core.constraint import Constraint, SolvedState
from ..engine_core.element import ElementIdentifier, Elements, ElementState, StateSnapshot
from ..engine_core.propagation import ConstraintCache, PropagationResult

if TYPE_CHECKING:
    from .commands import CommandResult

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a solver session."""
    ACTIVE = "active"
    SOLVED = "solved"  # Every category has a confirmed element
    ENDED = "ended"


@dataclass
class HistoryEntry:
    """One console command and its outcome (error is None on success)."""
    command: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Session:
    """
    A solver session.

    Clues are kept in insertion order; the 1-based position in that order
    is what `rm <n>` refers to.
    """
    session_id: str
    elements: Elements
    created_at: float
    board_name: str = "custom"

    constraints: list[Constraint] = field(default_factory=list)
    command_history: list[HistoryEntry] = field(default_factory=list)
    cache: ConstraintCache = field(default_factory=ConstraintCache)
    state: SessionState = SessionState.ACTIVE

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def is_active(self) -> bool:
        return self.state != SessionState.ENDED

    # =========================================================================
    # Registry access
    # =========================================================================

    def snapshot(self) -> StateSnapshot:
        """Take a consistent snapshot of the registry."""
        with self._lock:
            return self.elements.snapshot()

    def set_state(self, identifier: ElementIdentifier, state: ElementState):
        with self._lock:
            self.elements.set_state(identifier, state)

    def process_action(self, text: str):
        """Run an element state command against the registry."""
        with self._lock:
            return self.elements.process_action(text)

    # =========================================================================
    # Clues
    # =========================================================================

    def add_constraint(self, constraint: Constraint) -> bool:
        """Store a clue. Returns False if an identical clue is already stored."""
        if constraint in self.constraints:
            return False
        self.constraints.append(constraint)
        return True

    def remove_constraint(self, number: int) -> Constraint | None:
        """Remove the clue at 1-based position `number`."""
        if number < 1 or number > len(self.constraints):
            return None
        return self.constraints.pop(number - 1)

    def clear_constraints(self):
        self.constraints.clear()

    # =========================================================================
    # Deduction
    # =========================================================================

    def refresh_constraints(self) -> PropagationResult:
        """Recompute the advisory cache from scratch."""
        snapshot = self.snapshot()
        result = self.cache.update(list(self.constraints), snapshot)
        self._update_solved_state()
        return result

    def apply_suggestion(self, identifier: ElementIdentifier) -> ElementState | None:
        """
        Write one forced suggestion into the registry.

        Returns the state written, or None if there is no forced suggestion
        or the element is not on the board.
        """
        suggestion = self.cache.suggestion_for(identifier)
        new_state = suggestion.as_element_state() if suggestion else None
        if new_state is None or self.elements.get(identifier) is None:
            return None
        self.set_state(identifier, new_state)
        logger.info("Session %s: applied %s -> %s", self.session_id, identifier, new_state.value)
        return new_state

    def apply_all_suggestions(self) -> list[tuple[ElementIdentifier, SolvedState]]:
        """Write every forced suggestion for an element on the board into the registry."""
        applied = [
            (identifier, suggestion) for identifier, suggestion in self.cache.forced()
            if self.elements.get(identifier) is not None
        ]
        with self._lock:
            for identifier, suggestion in applied:
                self.elements.set_state(identifier, suggestion.as_element_state())
        if applied:
            logger.info("Session %s: applied %d suggestion(s)", self.session_id, len(applied))
        return applied

    def solution(self) -> dict[str, str | None]:
        """Confirmed element name per category (None while unknown)."""
        out = {}
        with self._lock:
            for name, section in (
                ("location", self.elements.locations),
                ("person", self.elements.people),
                ("weapon", self.elements.weapons),
            ):
                confirmed = [e.name for e in section if e.state == ElementState.CONFIRMED]
                out[name] = confirmed[0] if len(confirmed) == 1 else None
        return out

    def _update_solved_state(self):
        if self.state == SessionState.ENDED:
            return
        solved = all(name is not None for name in self.solution().values())
        self.state = SessionState.SOLVED if solved else SessionState.ACTIVE

    # =========================================================================
    # Console
    # =========================================================================

    def execute_command(self, line: str) -> CommandResult:
        """Run one console line. Call refresh_constraints() afterwards."""
        from .commands import execute_command
        return execute_command(self, line)

    def handle_input(self, line: str) -> CommandResult:
        """One input cycle: execute the command and refresh the cache."""
        result = self.execute_command(line)
        self.refresh_constraints()
        return result


class SessionManager:
    """
    Manages solver sessions.

    In-memory only; sessions are not persisted.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, elements: Elements, board_name: str = "custom") -> Session:
        """
        Create a new session over a registry.

        Args:
            elements: The element registry (owned by the session from now on)
            board_name: Label for display

        Returns:
            New Session with an empty clue list
        """
        session = Session(
            session_id=str(uuid.uuid4()),
            elements=elements,
            created_at=time.time(),
            board_name=board_name,
        )
        session.refresh_constraints()
        self._sessions[session.session_id] = session
        logger.info("Created session %s (%s)", session.session_id, board_name)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """End a session and drop it from memory."""
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED
        session.constraints.clear()
        session.command_history.clear()
        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """End sessions older than max_age. Returns how many were removed."""
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > max_age_seconds
        ]
        for sid in stale:
            self.end_session(sid)
        return len(stale)
