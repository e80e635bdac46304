"""
API Module - REST interface to solver sessions.

Clients:
1. Create a session (built-in board or custom elements)
2. Send console commands or clues
3. Read the board with advisory suggestions

All state is session-scoped and in-memory.
"""

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
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "CommandRequest",
    "AddConstraintRequest",
    "EvaluateRequest",
    # Responses
    "SessionResponse",
    "BoardResponse",
    "CommandResponse",
    "ConstraintResponse",
    "EvaluateResponse",
    "ErrorResponse",
    # Shared
    "ElementInfo",
    "ConstraintInfo",
    "HistoryInfo",
    "VerdictInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
