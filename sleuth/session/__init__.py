"""
Session Module - Manages ephemeral solver sessions.

A session represents one game's notes:
- Created when the player starts solving
- Holds the element registry and recorded clues
- Re-derives suggestions after every command
- Dropped when the game ends

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState, HistoryEntry
from .commands import CommandResult, CommandType, execute_command

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "HistoryEntry",
    "CommandResult",
    "CommandType",
    "execute_command",
]
