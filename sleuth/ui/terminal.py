"""
Terminal Loop - Interactive play on an ANSI terminal.

Enters the alternate screen, redraws the board after every line read
from stdin, and restores the screen on exit (EOF, "q"/"quit", Ctrl-C).
"""

from __future__ import annotations
from typing import TextIO
import logging
import sys

from ..session.manager import Session
from .render import input_cursor, render_board

logger = logging.getLogger(__name__)

TITLE = "Clue Solver"
QUIT_COMMANDS = {"q", "quit", "exit"}

ENTER_ALTERNATE_SCREEN = "\x1b[?1049h"
LEAVE_ALTERNATE_SCREEN = "\x1b[?1049l"
CLEAR_SCREEN = "\x1b[2J\x1b[H"


def set_title(title: str) -> str:
    return f"\x1b]0;{title}\x07"


def move_to(column: int, row: int) -> str:
    """Cursor movement; arguments are zero-based."""
    return f"\x1b[{row + 1};{column + 1}H"


def draw(session: Session, out: TextIO, color: bool = True):
    """Clear the screen and draw the board."""
    out.write(CLEAR_SCREEN)
    out.write("\n".join(render_board(session, color=color)))
    out.write("\n")
    out.write(move_to(*input_cursor(session)))
    out.flush()


def run(
    session: Session,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    color: bool = True,
):
    """Run the interactive loop until EOF or a quit command."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    stdout.write(ENTER_ALTERNATE_SCREEN + set_title(TITLE))
    try:
        draw(session, stdout, color)
        for line in stdin:
            if line.strip().lower() in QUIT_COMMANDS:
                break
            session.handle_input(line)
            draw(session, stdout, color)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        stdout.write(LEAVE_ALTERNATE_SCREEN)
        stdout.flush()
