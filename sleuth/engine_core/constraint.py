"""
Constraint - A validated clue and the single-clue deduction over it.

A clue says "at least one of these elements is true". Given the current
knowledge, a clue yields new information only when exactly one of its
leaves is still UNKNOWN. That leaf is then tried both ways:

    | leaf = true | leaf = false | verdict                           |
    |-------------|--------------|-----------------------------------|
    | true        | false        | CONFIRMED: the leaf must be true  |
    | false       | true         | DISMISSED                         |
    | true        | true         | ANY: clue holds already           |
    | false       | false        | impossible for OR, see below      |

OR is monotonic in each argument, so switching the leaf from false to
true can never lower the result. With the leaf itself true, an OR tree is
true, so false/false can only come from a broken tree and is raised as
an InvariantViolation.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Union

from .element import ElementIdentifier, ElementState, StateSnapshot
from .errors import ConstraintParseError, InvariantViolation
from .tokenizer import tokenize
from .tokens import LeafToken, Token, TreeToken, flatten_tree
from .tree import build_tree


class StateReader(Protocol):
    """Anything that can answer "what do we know about this element"."""

    def get_state(self, identifier: ElementIdentifier) -> ElementState:
        ...


class SolvedState(Enum):
    """The engine's verdict for the one unresolved leaf of a clue."""
    CONFIRMED = "confirmed"
    DISMISSED = "dismissed"
    ANY = "any"  # Clue already holds; no forced value

    @property
    def is_forced(self) -> bool:
        return self is not SolvedState.ANY

    def as_element_state(self) -> ElementState | None:
        """Registry state this verdict suggests, None for ANY."""
        if self is SolvedState.CONFIRMED:
            return ElementState.CONFIRMED
        if self is SolvedState.DISMISSED:
            return ElementState.DISMISSED
        return None


class SolvableKind(Enum):
    YES = "yes"  # Exactly one unresolved leaf
    ALREADY_SOLVED = "already_solved"  # No unresolved leaves
    NO = "no"  # Two or more unresolved leaves


@dataclass(frozen=True)
class Solvable:
    """Pre-check verdict. identifier is set only for YES."""
    kind: SolvableKind
    identifier: ElementIdentifier | None = None

    @classmethod
    def yes(cls, identifier: ElementIdentifier) -> Solvable:
        return cls(SolvableKind.YES, identifier)

    @classmethod
    def already_solved(cls) -> Solvable:
        return cls(SolvableKind.ALREADY_SOLVED)

    @classmethod
    def no(cls) -> Solvable:
        return cls(SolvableKind.NO)

    @property
    def is_yes(self) -> bool:
        return self.kind is SolvableKind.YES


@dataclass(frozen=True)
class Deduction:
    """Successful solve: what the clue says about one element."""
    identifier: ElementIdentifier
    state: SolvedState


SolveResult = Union[Deduction, Solvable]

# Hypotheses tried for the unresolved leaf, in decision-table order
_TEST_STATES = (ElementState.CONFIRMED, ElementState.DISMISSED)


@dataclass(frozen=True)
class Constraint:
    """
    A clue guaranteed to be a well-formed tree.

    Always holds at least one operator and two leaves. Immutable, with
    structural equality and hashing.
    """
    tree: TreeToken

    def __post_init__(self):
        if not isinstance(self.tree, TreeToken):
            raise TypeError(f"Constraint requires a TreeToken, got {type(self.tree).__name__}")

    @classmethod
    def parse(cls, raw: str) -> Constraint:
        """
        Parse a clue such as "w1 | l3 | p5".

        Raises:
            ConstraintParseError: with INVALID_SECTION, INVALID_INDEX or
                INVALID_CONSTRAINT
        """
        tokens = tokenize(raw)
        try:
            tree = build_tree(tokens)
        except ConstraintParseError as e:
            e.raw = raw
            raise
        return cls(tree)

    def __str__(self) -> str:
        return str(self.tree)

    def leaves(self) -> list[ElementIdentifier]:
        """Leaf identifiers in written order."""
        out = []
        for token in flatten_tree(self.tree):
            if not isinstance(token, LeafToken):
                raise InvariantViolation(f"Non-leaf token {token!r} inside built tree")
            out.append(token.identifier)
        return out

    def solvable(self, states: StateReader) -> Solvable:
        """
        Check whether this clue has exactly one unresolved leaf.

        Stops scanning at the second UNKNOWN leaf.
        """
        missing = None

        for identifier in self.leaves():
            if states.get_state(identifier) == ElementState.UNKNOWN:
                if missing is not None:
                    return Solvable.no()
                missing = identifier

        if missing is None:
            return Solvable.already_solved()
        return Solvable.yes(missing)

    def solve(self, states: StateReader) -> SolveResult:
        """
        Derive the forced state of the single unresolved leaf.

        Returns a Deduction, or the non-YES Solvable verdict when the clue
        cannot be solved right now.
        """
        verdict = self.solvable(states)
        if not verdict.is_yes:
            return verdict
        solve_for = verdict.identifier

        snapshot = _as_snapshot(states)
        result = tuple(
            self.evaluate(snapshot.with_state(solve_for, test_state))
            for test_state in _TEST_STATES
        )

        if result == (True, False):
            state = SolvedState.CONFIRMED
        elif result == (False, True):
            state = SolvedState.DISMISSED
        elif result == (True, True):
            state = SolvedState.ANY
        else:
            raise InvariantViolation(
                f"Clue '{self}' is false with {solve_for} both confirmed and dismissed"
            )

        return Deduction(solve_for, state)

    def evaluate(self, states: StateReader) -> bool:
        """
        Evaluate the clue with every leaf fixed.

        Raises:
            InvariantViolation: if any leaf is still UNKNOWN
        """
        return _evaluate(self.tree, states)


def _evaluate(token: Token, states: StateReader) -> bool:
    if isinstance(token, TreeToken):
        left = _evaluate(token.left, states)
        right = _evaluate(token.right, states)
        return token.op.apply(left, right)

    if isinstance(token, LeafToken):
        state = states.get_state(token.identifier)
        if state == ElementState.CONFIRMED:
            return True
        if state == ElementState.DISMISSED:
            return False
        raise InvariantViolation(f"Evaluated unresolved element {token.identifier}")

    raise InvariantViolation(f"Cannot evaluate token {token!r}")


def _as_snapshot(states: StateReader) -> StateSnapshot:
    if isinstance(states, StateSnapshot):
        return states
    snapshot = getattr(states, "snapshot", None)
    if callable(snapshot):
        return snapshot()
    raise TypeError(f"Cannot take a snapshot of {type(states).__name__}")
