"""
Tokenizer - Turns clue text into a flat token list.

Grammar:
    <clue>    ::= <element> ("|" <element>)+
    <element> ::= <category-letter><positive-integer>

Whitespace is ignored everywhere. Every non-whitespace character other
than "|" accumulates into the current operand, which is flushed into a
LeafToken when an operator or the end of input is reached. Empty operands
are skipped here; structural validation belongs to the tree builder.
"""

from __future__ import annotations

from .element import ElementIdentifier, ElementType
from .errors import ConstraintParseError, ProcessResult
from .tokens import LeafToken, OpToken, Ops, Token

OPERATORS = {op.value: op for op in Ops}


class _TokenizeContext:
    """Accumulates the current operand and the emitted tokens."""

    def __init__(self):
        self.out: list[Token] = []
        self.working: list[str] = []

    def flush(self):
        if not self.working:
            return

        element_type = ElementType.from_letter(self.working[0])
        if element_type is None:
            raise ConstraintParseError(ProcessResult.INVALID_SECTION)

        digits = []
        for ch in self.working[1:]:
            if not ch.isascii() or not ch.isdigit():
                break
            digits.append(ch)
        if not digits:
            raise ConstraintParseError(ProcessResult.INVALID_INDEX)

        # 1-based in text, 0-based in the engine; "w0" clamps to index 0
        index = max(int("".join(digits)) - 1, 0)

        self.working.clear()
        self.out.append(LeafToken(ElementIdentifier(element_type, index)))

    def operator(self, op: Ops):
        self.flush()
        self.out.append(OpToken(op))


def tokenize(raw: str) -> list[Token]:
    """
    Tokenize a clue string.

    Raises:
        ConstraintParseError: INVALID_SECTION for an unknown category letter,
            INVALID_INDEX for a missing or unparsable index
    """
    ctx = _TokenizeContext()

    try:
        for ch in raw:
            if ch.isspace():
                continue
            if ch in OPERATORS:
                ctx.operator(OPERATORS[ch])
            else:
                ctx.working.append(ch)
        ctx.flush()
    except ConstraintParseError as e:
        e.raw = raw
        raise

    return ctx.out
