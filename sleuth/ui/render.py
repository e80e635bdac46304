"""
Board Rendering - Draws a session as text blocks.

Two columns side by side:
- Elements: one box per category, state char colored by registry state,
  name colored by the advisory suggestion
- Console + Constraints: last commands and the stored clues (newest
  first, clues with nothing to say dimmed)

Rendering is a pure function of the session; terminal.py writes it out.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.constraint import SolvedState
from ..engine_core.element import ElementState, ElementType
from ..session.manager import Session

HISTORY_LINES = 3
MIN_PANEL_WIDTH = 20

RESET = "0"
BOLD = "1"
RED = "31"
GREEN = "32"
DARK_GREY = "90"

SECTION_TITLES = {
    ElementType.LOCATION: "(L)ocations",
    ElementType.PERSON: "(P)eople",
    ElementType.WEAPON: "(W)eapons",
}


@dataclass
class Line:
    """Styled text that remembers its visible width."""
    segments: list[tuple[str, tuple[str, ...]]] = field(default_factory=list)

    @property
    def width(self) -> int:
        return sum(len(text) for text, _ in self.segments)

    def append(self, text: str, *codes: str) -> Line:
        self.segments.append((text, codes))
        return self

    def extend(self, other: Line) -> Line:
        self.segments.extend(other.segments)
        return self

    def plain(self) -> str:
        return "".join(text for text, _ in self.segments)

    def render(self, color: bool = True) -> str:
        if not color:
            return self.plain()
        out = []
        for text, codes in self.segments:
            if codes:
                out.append(f"\x1b[{';'.join(codes)}m{text}\x1b[{RESET}m")
            else:
                out.append(text)
        return "".join(out)


def element_lines(session: Session) -> list[Line]:
    """The element board."""
    elements = session.elements
    max_name_length = max(
        elements.max_name_length,
        *(len(title) - 1 for title in SECTION_TITLES.values()),
    )

    lines = []
    current_type = None
    for identifier, element in elements.iter_elements():
        if identifier.element_type != current_type:
            current_type = identifier.element_type
            lines.append(_separator(SECTION_TITLES[current_type], max_name_length))

        suggestion = session.cache.suggestion_for(identifier)
        line = Line().append("|")
        line.append(element.state.as_char(), *_state_codes(element.state))
        line.append("| ")
        line.append(element.name, *_suggestion_codes(suggestion))
        line.append(" " * (max_name_length - len(element.name)) + " |")
        lines.append(line)

    lines.append(_separator("", max_name_length))
    return lines


def console_lines(session: Session) -> list[Line]:
    """Console box followed by the constraints box."""
    history = session.command_history
    body = []
    for entry in reversed(history[-HISTORY_LINES:]):
        body.append(
            Line().append(
                f"{entry.command}: {entry.error or 'ok'}",
                BOLD,
                GREEN if entry.ok else RED,
            )
        )
    if len(history) > HISTORY_LINES:
        body.append(Line().append("...", DARK_GREY))

    width = max([line.width for line in body] + [MIN_PANEL_WIDTH])
    lines = [
        Line().append("+-").append("Console", BOLD).append("-" * (width - 6) + "+"),
        Line().append(f"| >{' ' * width}|"),
    ]
    lines.extend(_boxed(line, width) for line in body)
    lines.append(Line().append(f"+{'-' * (width + 2)}+"))

    lines.append(Line())
    lines.extend(constraint_lines(session))
    return lines


def constraint_lines(session: Session) -> list[Line]:
    """Stored clues, newest first, numbered by insertion order."""
    body = []
    for number in range(len(session.constraints), 0, -1):
        constraint = session.constraints[number - 1]
        codes = (DARK_GREY,) if session.cache.is_unresolved(constraint) else ()
        body.append(Line().append(f"{number}. {constraint}", *codes))

    width = max([line.width for line in body] + [MIN_PANEL_WIDTH])
    lines = [Line().append(f"+-Constraints{'-' * (width - 10)}+")]
    lines.extend(_boxed(line, width) for line in body)
    lines.append(Line().append(f"+{'-' * (width + 2)}+"))
    return lines


def render_board(session: Session, color: bool = True) -> list[str]:
    """Render the full board as a list of text rows."""
    columns = [element_lines(session), console_lines(session)]
    widths = [max((line.width for line in column), default=0) for column in columns]
    height = max(len(column) for column in columns)

    rows = []
    for i in range(height):
        parts = []
        for column, width in zip(columns, widths):
            if i < len(column):
                line = column[i]
                parts.append(line.render(color) + " " * (width - line.width + 1))
            else:
                parts.append(" " * (width + 1))
        rows.append("".join(parts).rstrip())
    return rows


def input_cursor(session: Session) -> tuple[int, int]:
    """(column, row), zero-based, of the console input position."""
    first = element_lines(session)[0]
    return first.width + 5, 1


def _separator(title: str, max_name_length: int) -> Line:
    padding = "-" * (max_name_length + 1 - len(title))
    return Line().append(f"+-+-{title}{padding}+")


def _boxed(line: Line, width: int) -> Line:
    return Line().append("| ").extend(line).append(" " * (width - line.width) + " |")


def _state_codes(state: ElementState) -> tuple[str, ...]:
    if state == ElementState.CONFIRMED:
        return (GREEN,)
    if state == ElementState.DISMISSED:
        return (RED,)
    return ()


def _suggestion_codes(suggestion: SolvedState | None) -> tuple[str, ...]:
    if suggestion == SolvedState.CONFIRMED:
        return (GREEN,)
    if suggestion == SolvedState.DISMISSED:
        return (RED,)
    return ()
