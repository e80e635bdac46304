"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_SECTION: Unknown category letter (must be l, p or w)
- INVALID_INDEX: Missing or unparsable element index
- INVALID_STATE: Unknown state letter in an element command
- INVALID_CONSTRAINT: Clue is not "<element> | <element> ..."
- INVALID_COMMAND: Console command not understood
- NO_SUGGESTION: `apply <element>` with no forced suggestion
- INVALID_BOARD: Unknown built-in board
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

# Room for a clue at the leaf limit with generous whitespace
MAX_INPUT_LENGTH = 1024


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    SOLVED = "solved"
    ENDED = "ended"


class ElementStateValue(str, Enum):
    """Registry knowledge for one element."""
    UNKNOWN = "unknown"
    CONFIRMED = "confirmed"
    DISMISSED = "dismissed"


class SuggestionValue(str, Enum):
    """Advisory verdict derived from a clue."""
    CONFIRMED = "confirmed"
    DISMISSED = "dismissed"
    ANY = "any"


class SolvableValue(str, Enum):
    """Whether a clue can be evaluated right now."""
    YES = "yes"
    ALREADY_SOLVED = "already_solved"
    NO = "no"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_SECTION = "INVALID_SECTION"
    INVALID_INDEX = "INVALID_INDEX"
    INVALID_STATE = "INVALID_STATE"
    INVALID_CONSTRAINT = "INVALID_CONSTRAINT"
    INVALID_COMMAND = "INVALID_COMMAND"
    NO_SUGGESTION = "NO_SUGGESTION"
    INVALID_BOARD = "INVALID_BOARD"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ElementInfo(BaseModel):
    """One element on the board."""
    element_id: str = Field(description="Clue reference, e.g. l3")
    category: str = Field(description="location, person or weapon")
    name: str
    state: ElementStateValue = ElementStateValue.UNKNOWN
    suggestion: Optional[SuggestionValue] = None


class ConstraintInfo(BaseModel):
    """A stored clue."""
    number: int = Field(description="1-based position, used by `rm <n>`")
    text: str
    leaves: list[str] = Field(default_factory=list)
    unresolved: bool = Field(
        False, description="True when the clue currently yields no new information"
    )


class HistoryInfo(BaseModel):
    """A console command and its outcome."""
    command: str
    ok: bool
    error: Optional[str] = None


class VerdictInfo(BaseModel):
    """Outcome of solving one clue."""
    solvable: SolvableValue
    element_id: Optional[str] = Field(None, description="The single unresolved element")
    suggestion: Optional[SuggestionValue] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a solver session."""
    board: str = Field("classic", description="Built-in board name")
    locations: Optional[list[str]] = Field(None, description="Custom locations")
    people: Optional[list[str]] = Field(None, description="Custom people")
    weapons: Optional[list[str]] = Field(None, description="Custom weapons")

    @property
    def is_custom(self) -> bool:
        return any(v is not None for v in (self.locations, self.people, self.weapons))


class CommandRequest(BaseModel):
    """A console command, exactly as typed."""
    command: str = Field(..., min_length=1, max_length=MAX_INPUT_LENGTH, description="e.g. l2c, w1 | l3, rm 1, apply")


class AddConstraintRequest(BaseModel):
    """Request to record a clue."""
    clue: str = Field(..., min_length=1, max_length=MAX_INPUT_LENGTH, description="e.g. w1 | l3 | p5")


class EvaluateRequest(BaseModel):
    """Stateless evaluation of one clue against supplied knowledge."""
    clue: str = Field(..., min_length=1, max_length=MAX_INPUT_LENGTH)
    confirmed: list[str] = Field(default_factory=list, description="Element ids known true")
    dismissed: list[str] = Field(default_factory=list, description="Element ids known false")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    board_name: str
    created_at: float = 0.0
    element_count: int = 0
    constraint_count: int = 0
    solution: dict[str, Optional[str]] = Field(default_factory=dict)
    api_version: str = "v1"


class BoardResponse(BaseModel):
    """Complete board for display."""
    session_id: str
    status: SessionStatus
    elements: list[ElementInfo] = Field(default_factory=list)
    constraints: list[ConstraintInfo] = Field(default_factory=list)
    history: list[HistoryInfo] = Field(default_factory=list)
    solution: dict[str, Optional[str]] = Field(default_factory=dict)
    api_version: str = "v1"


class CommandResponse(BaseModel):
    """Response after running a console command."""
    session_id: str
    success: bool
    command_type: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    applied: list[str] = Field(default_factory=list)
    board: Optional[BoardResponse] = None
    api_version: str = "v1"


class ConstraintResponse(BaseModel):
    """Response after recording a clue."""
    session_id: str
    constraint: ConstraintInfo
    created: bool = Field(True, description="False if the clue was already stored")
    verdict: VerdictInfo
    api_version: str = "v1"


class EvaluateResponse(BaseModel):
    """Result of a stateless clue evaluation."""
    clue: str
    leaves: list[str]
    verdict: VerdictInfo
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
