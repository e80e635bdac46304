"""
UI Module - Terminal rendering for interactive play.
"""

from .render import Line, render_board, element_lines, console_lines, constraint_lines
from .terminal import run, draw

__all__ = [
    "Line",
    "render_board",
    "element_lines",
    "console_lines",
    "constraint_lines",
    "run",
    "draw",
]
