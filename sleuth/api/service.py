"""
API Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests to session/engine calls
2. Manages sessions
3. Formats responses

Framework-agnostic: every method returns a response model or an
ErrorResponse, never raises for user errors.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    CommandRequest,
    AddConstraintRequest,
    EvaluateRequest,
    # Responses
    SessionResponse,
    BoardResponse,
    CommandResponse,
    ConstraintResponse,
    EvaluateResponse,
    ErrorResponse,
    # Shared
    ElementInfo,
    ConstraintInfo,
    HistoryInfo,
    VerdictInfo,
    # Enums
    ErrorCode,
    SessionStatus,
    ElementStateValue,
    SuggestionValue,
    SolvableValue,
)
from ..engine_core.constraint import Constraint, Deduction, SolveResult
from ..engine_core.element import (
    ElementIdentifier,
    ElementState,
    Elements,
    StateSnapshot,
)
from ..engine_core.errors import ConstraintParseError
from ..games import create_board
from ..session import Session, SessionManager, SessionState

_CATEGORY_NAMES = {
    "l": "location",
    "p": "person",
    "w": "weapon",
}


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        session = service.create_session(CreateSessionRequest())
        service.run_command(session.session_id, CommandRequest(command="w1x"))
        service.add_constraint(session.session_id, AddConstraintRequest(clue="w1 | l1"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """Create a session from a built-in board or custom element lists."""
        if request.is_custom:
            elements = Elements.from_names(
                locations=request.locations or [],
                people=request.people or [],
                weapons=request.weapons or [],
            )
            board_name = "custom"
        else:
            try:
                elements = create_board(request.board)
            except ValueError as e:
                return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_BOARD)
            board_name = request.board

        session = self.session_manager.create_session(elements, board_name=board_name)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def get_board(self, session_id: str) -> BoardResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._board_to_response(session)

    def run_command(self, session_id: str, request: CommandRequest) -> CommandResponse | ErrorResponse:
        """
        Run one console command, then refresh suggestions.

        Rejected commands are reported in the response (success=false),
        the same way the console shows them.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        result = session.handle_input(request.command)
        return CommandResponse(
            session_id=session_id,
            success=result.success,
            command_type=result.command_type.value if result.command_type else None,
            error=result.error,
            error_code=result.error_code,
            applied=result.applied,
            board=self._board_to_response(session),
        )

    def add_constraint(
        self, session_id: str, request: AddConstraintRequest
    ) -> ConstraintResponse | ErrorResponse:
        """Parse and store a clue; parse failures are errors."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        try:
            constraint = Constraint.parse(request.clue)
        except ConstraintParseError as e:
            return _parse_error(e, request.clue)

        created = session.add_constraint(constraint)
        session.refresh_constraints()

        return ConstraintResponse(
            session_id=session_id,
            constraint=self._constraint_info(session, constraint),
            created=created,
            verdict=_verdict_info(constraint.solve(session.snapshot())),
        )

    def remove_constraint(self, session_id: str, number: int) -> BoardResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        if session.remove_constraint(number) is None:
            return ErrorResponse(
                error=f"No constraint number {number}",
                error_code=ErrorCode.INVALID_COMMAND,
                details={"count": len(session.constraints)},
            )
        session.refresh_constraints()
        return self._board_to_response(session)

    def evaluate(self, request: EvaluateRequest) -> EvaluateResponse | ErrorResponse:
        """Solve one clue against the supplied knowledge, without a session."""
        try:
            constraint = Constraint.parse(request.clue)
        except ConstraintParseError as e:
            return _parse_error(e, request.clue)

        states = {}
        for ids, state in (
            (request.confirmed, ElementState.CONFIRMED),
            (request.dismissed, ElementState.DISMISSED),
        ):
            for raw_id in ids:
                identifier = ElementIdentifier.parse(raw_id)
                if identifier is None:
                    return ErrorResponse(
                        error=f"Invalid element id: {raw_id}",
                        error_code=ErrorCode.INVALID_INDEX,
                    )
                states[identifier] = state

        return EvaluateResponse(
            clue=str(constraint),
            leaves=[str(leaf) for leaf in constraint.leaves()],
            verdict=_verdict_info(constraint.solve(StateSnapshot(states))),
        )

    # =========================================================================
    # Formatting
    # =========================================================================

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=_status(session),
            board_name=session.board_name,
            created_at=session.created_at,
            element_count=sum(1 for _ in session.elements.iter_elements()),
            constraint_count=len(session.constraints),
            solution=session.solution(),
        )

    def _board_to_response(self, session: Session) -> BoardResponse:
        elements = []
        for identifier, element in session.elements.iter_elements():
            suggestion = session.cache.suggestion_for(identifier)
            elements.append(ElementInfo(
                element_id=str(identifier),
                category=_CATEGORY_NAMES[identifier.element_type.letter],
                name=element.name,
                state=ElementStateValue(element.state.value),
                suggestion=SuggestionValue(suggestion.value) if suggestion else None,
            ))

        return BoardResponse(
            session_id=session.session_id,
            status=_status(session),
            elements=elements,
            constraints=[
                self._constraint_info(session, constraint)
                for constraint in session.constraints
            ],
            history=[
                HistoryInfo(command=entry.command, ok=entry.ok, error=entry.error)
                for entry in session.command_history
            ],
            solution=session.solution(),
        )

    def _constraint_info(self, session: Session, constraint: Constraint) -> ConstraintInfo:
        return ConstraintInfo(
            number=session.constraints.index(constraint) + 1,
            text=str(constraint),
            leaves=[str(leaf) for leaf in constraint.leaves()],
            unresolved=session.cache.is_unresolved(constraint),
        )


def _status(session: Session) -> SessionStatus:
    if session.state == SessionState.SOLVED:
        return SessionStatus.SOLVED
    if session.state == SessionState.ENDED:
        return SessionStatus.ENDED
    return SessionStatus.ACTIVE


def _verdict_info(result: SolveResult) -> VerdictInfo:
    if isinstance(result, Deduction):
        return VerdictInfo(
            solvable=SolvableValue.YES,
            element_id=str(result.identifier),
            suggestion=SuggestionValue(result.state.value),
        )
    return VerdictInfo(solvable=SolvableValue(result.kind.value))


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


def _parse_error(error: ConstraintParseError, clue: str) -> ErrorResponse:
    return ErrorResponse(
        error=str(error),
        error_code=ErrorCode(error.result.name),
        details={"clue": clue},
    )
