"""
Clue tokens.

A tokenized clue is a flat list of OpToken / LeafToken. TreeToken only
appears once the tree builder has folded operators with their operands.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .element import ElementIdentifier


class Ops(Enum):
    """Boolean operators. Disjunction is the only one clues use."""
    OR = "|"

    def apply(self, left: bool, right: bool) -> bool:
        if self is Ops.OR:
            return left or right
        raise ValueError(f"Unsupported operator: {self}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OpToken:
    """An operator between two operands, before tree building."""
    op: Ops

    def __str__(self) -> str:
        return str(self.op)


@dataclass(frozen=True)
class LeafToken:
    """A reference to one element."""
    identifier: ElementIdentifier

    def __str__(self) -> str:
        return str(self.identifier)


@dataclass(frozen=True)
class TreeToken:
    """An internal node: (operator, left subtree, right subtree)."""
    op: Ops
    left: Token
    right: Token

    def __str__(self) -> str:
        return f"{self.left} {self.op} {self.right}"


Token = Union[OpToken, LeafToken, TreeToken]


def flatten_tree(token: Token) -> list[Token]:
    """
    Flatten a tree into its non-tree tokens, left to right.

    Tree nodes contribute no entry of their own, so for a built clue this
    is the leaf list in the order the leaves were written.
    """
    out = []
    stack = [token]
    while stack:
        current = stack.pop()
        if isinstance(current, TreeToken):
            stack.append(current.right)
            stack.append(current.left)
        else:
            out.append(current)
    return out
