"""
Tests for terminal rendering and the interactive loop.
"""

import io

from ..ui.render import Line, console_lines, constraint_lines, element_lines, render_board
from ..ui.terminal import ENTER_ALTERNATE_SCREEN, LEAVE_ALTERNATE_SCREEN, run


class TestLine:
    def test_width_ignores_styles(self):
        line = Line().append("ab", "31").append("cd")
        assert line.width == 4
        assert line.render(color=False) == "abcd"
        assert line.render() == "\x1b[31mab\x1b[0mcd"


class TestElementLines:
    """Tests for the element board."""

    def test_layout(self, session):
        lines = [line.plain() for line in element_lines(session)]

        assert lines[0].startswith("+-+-(L)ocations")
        assert lines[1].startswith("|?| Kitchen")
        assert lines[-1].startswith("+-+-")
        # 3 separators + 6 elements + closing line
        assert len(lines) == 10
        assert len({len(line) for line in lines}) == 1

    def test_state_char(self, session):
        session.handle_input("w1x")
        lines = [line.plain() for line in element_lines(session)]
        assert "|X| Knife" in "\n".join(lines)

    def test_suggestion_colors_name(self, session):
        session.handle_input("w1 | l1")
        session.handle_input("w1x")

        kitchen = element_lines(session)[1]

        assert "\x1b[32mKitchen" in kitchen.render()


class TestConsoleLines:
    """Tests for the console and constraints boxes."""

    def test_history_newest_first(self, session):
        session.handle_input("w1x")
        session.handle_input("q1c")

        lines = [line.plain() for line in console_lines(session)]

        assert lines[0].startswith("+-Console")
        assert "q1c: Invalid section" in lines[2]
        assert "w1x: ok" in lines[3]

    def test_history_truncated(self, session):
        for command in ("w1x", "w2x", "p1x", "p2x"):
            session.handle_input(command)

        text = "\n".join(line.plain() for line in console_lines(session))

        assert "w1x" not in text
        assert "..." in text

    def test_constraints_newest_first_and_dimmed(self, session):
        session.handle_input("w1 | l1")
        session.handle_input("p1 | p2")
        session.handle_input("w1x")

        lines = constraint_lines(session)

        assert "2. p1 | p2" in lines[1].plain()
        assert "1. w1 | l1" in lines[2].plain()
        # p1 | p2 has two unknowns: dimmed
        assert "\x1b[90m2. p1 | p2" in lines[1].render()
        assert "\x1b[90m" not in lines[2].render()

    def test_box_widths_match(self, session):
        session.handle_input("w1 | l1 | p1 | p2 | w2 | l2")
        lines = console_lines(session)
        blank = [line.width for line in lines].index(0)

        console, constraints = lines[:blank], lines[blank + 1:]

        assert len({line.width for line in console}) == 1
        assert len({line.width for line in constraints}) == 1


class TestRenderBoard:
    def test_columns_side_by_side(self, session):
        rows = render_board(session, color=False)

        assert "(L)ocations" in rows[0]
        assert "Console" in rows[0]


class TestRun:
    """Tests for the interactive loop."""

    def test_processes_lines_until_quit(self, session):
        stdin = io.StringIO("w1 | l1\nw1x\nq\nl1c\n")
        stdout = io.StringIO()

        run(session, stdin=stdin, stdout=stdout, color=False)

        assert len(session.constraints) == 1
        assert session.elements.weapons[0].state.as_char() == "X"
        # Input after "q" is never read
        assert session.elements.locations[0].state.as_char() == "?"

        output = stdout.getvalue()
        assert output.startswith(ENTER_ALTERNATE_SCREEN)
        assert output.endswith(LEAVE_ALTERNATE_SCREEN)
        assert "Clue Solver" in output

    def test_eof_leaves_alternate_screen(self, session):
        stdout = io.StringIO()
        run(session, stdin=io.StringIO(""), stdout=stdout, color=False)
        assert stdout.getvalue().endswith(LEAVE_ALTERNATE_SCREEN)
