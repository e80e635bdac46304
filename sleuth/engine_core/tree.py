"""
Tree Builder - Folds a flat token list into a binary expression tree.

The first operator is always folded first, so "a | b | c" builds as
"(a | b) | c". Disjunction is associative and commutative, so this only
affects display order.

Each fold rescans from the start, which is O(n^2) in the number of
tokens. Clues hold a handful of leaves, so this is not worth a stack fold.

The tree is as deep as the clue has leaves and every walk over it
recurses, so clues are capped at MAX_LEAVES leaves.
"""

from __future__ import annotations

from .errors import ConstraintParseError, ProcessResult
from .tokens import LeafToken, OpToken, Token, TreeToken

MAX_LEAVES = 64


def build_tree(tokens: list[Token]) -> TreeToken:
    """
    Build a single tree from a token list.

    Raises:
        ConstraintParseError: INVALID_CONSTRAINT for empty or single-token
            input, a dangling operator, an operator next to another
            operator, leaves with no operator between them, or more than
            MAX_LEAVES leaves
    """
    tokens = list(tokens)
    if len(tokens) <= 1:
        raise ConstraintParseError(ProcessResult.INVALID_CONSTRAINT)
    if sum(isinstance(token, LeafToken) for token in tokens) > MAX_LEAVES:
        raise ConstraintParseError(ProcessResult.INVALID_CONSTRAINT)

    while len(tokens) > 1:
        i = _first_operator(tokens)
        if i is None:
            raise ConstraintParseError(ProcessResult.INVALID_CONSTRAINT)

        op_token = tokens[i]
        left = _safe_remove(tokens, i - 1)
        # The operator shifted down to i - 1, so its right operand is now at i
        right = _safe_remove(tokens, i)
        if isinstance(left, OpToken) or isinstance(right, OpToken):
            raise ConstraintParseError(ProcessResult.INVALID_CONSTRAINT)

        tokens[i - 1] = TreeToken(op_token.op, left, right)

    if len(tokens) != 1 or not isinstance(tokens[0], TreeToken):
        raise ConstraintParseError(ProcessResult.INVALID_CONSTRAINT)

    return tokens[0]


def _first_operator(tokens: list[Token]) -> int | None:
    for i, token in enumerate(tokens):
        if isinstance(token, OpToken):
            return i
    return None


def _safe_remove(tokens: list[Token], index: int) -> Token:
    if index < 0 or index >= len(tokens):
        raise ConstraintParseError(ProcessResult.INVALID_CONSTRAINT)
    return tokens.pop(index)
