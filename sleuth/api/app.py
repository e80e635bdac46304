"""
FastAPI Application - REST API for the solver.

Endpoints:
    GET    /api/v1/health                              Health check
    POST   /api/v1/sessions                            Create session
    GET    /api/v1/sessions                            List sessions
    GET    /api/v1/sessions/{id}                       Get session status
    DELETE /api/v1/sessions/{id}                       End session
    GET    /api/v1/sessions/{id}/board                 Elements, clues, history
    POST   /api/v1/sessions/{id}/commands              Run a console command
    POST   /api/v1/sessions/{id}/constraints           Record a clue
    DELETE /api/v1/sessions/{id}/constraints/{number}  Remove a clue
    POST   /api/v1/evaluate                            Solve one clue, no session

Suggestions in board responses are advisory: they never change element
states until the player runs `apply`.
"""

from typing import Optional, Union

from .. import __version__
from ..config import Settings


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        CommandRequest,
        AddConstraintRequest,
        EvaluateRequest,
        # Response models
        SessionResponse,
        BoardResponse,
        CommandResponse,
        ConstraintResponse,
        EvaluateResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Sleuth Solver API",
        description="""
Deduction assistant for Clue-style board games.

## Clues

A clue is a disjunction of element references: `w1 | l3 | p5` means at
least one of weapon 1, location 3 and person 5 is true. When exactly one
element of a clue is still unknown, the engine reports the state that
element is forced into.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_SECTION` | Unknown category letter |
| `INVALID_INDEX` | Missing or unparsable index |
| `INVALID_CONSTRAINT` | Malformed clue |
        """,
        version=__version__,
        docs_url=None if settings.is_production else "/api/docs",
        redoc_url=None if settings.is_production else "/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Map an ErrorResponse to its HTTP status."""
        status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ErrorResponse(
            error="Invalid request body",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": [err.get("msg", "") for err in exc.errors()]},
        )
        return JSONResponse(status_code=422, content=error.model_dump(mode="json"))

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="sleuth", version=__version__)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Unknown board"}},
        tags=["Sessions"],
        summary="Create a new solver session",
    )
    async def create_session(body: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new solver session.

        Use `board=classic` for the standard edition, or pass `locations`,
        `people` and `weapons` for a custom set.
        """
        return respond(api_service.create_session(body))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a solver session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Board Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/board",
        response_model=BoardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Board"],
        summary="Get elements, clues and command history",
    )
    async def get_board(session_id: str) -> Union[BoardResponse, JSONResponse]:
        return respond(api_service.get_board(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/commands",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Board"],
        summary="Run a console command",
    )
    async def run_command(
        session_id: str,
        body: CommandRequest,
    ) -> Union[CommandResponse, JSONResponse]:
        """
        Run one console command exactly as typed in the terminal UI.

        Rejected commands return `success=false` with the error message.
        """
        return respond(api_service.run_command(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/constraints",
        response_model=ConstraintResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Clue could not be parsed"},
            404: {"model": ErrorResponse},
        },
        tags=["Board"],
        summary="Record a clue",
    )
    async def add_constraint(
        session_id: str,
        body: AddConstraintRequest,
    ) -> Union[ConstraintResponse, JSONResponse]:
        return respond(api_service.add_constraint(session_id, body))

    @app.delete(
        "/api/v1/sessions/{session_id}/constraints/{number}",
        response_model=BoardResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Board"],
        summary="Remove a clue by its 1-based number",
    )
    async def remove_constraint(session_id: str, number: int) -> Union[BoardResponse, JSONResponse]:
        return respond(api_service.remove_constraint(session_id, number))

    # =========================================================================
    # Stateless evaluation
    # =========================================================================

    @app.post(
        "/api/v1/evaluate",
        response_model=EvaluateResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Clues"],
        summary="Solve one clue against supplied knowledge",
    )
    async def evaluate(body: EvaluateRequest) -> Union[EvaluateResponse, JSONResponse]:
        return respond(api_service.evaluate(body))

    return app


# For running directly: uvicorn sleuth.api.app:app
app = create_app()
