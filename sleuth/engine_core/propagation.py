"""
Propagation - Re-evaluates every stored clue against a snapshot.

The result is advisory: a map from element to the verdict some clue
derives for it, and the set of clues that carry no new information right
now. Nothing here writes to the registry. Applying a suggestion is an
explicit player action (see session.commands).

Each refresh is a full recomputation. Every clue only reads the shared
snapshot, so evaluation order does not change the outcome, except that a
later clue overwrites an earlier one's verdict for the same element.
"""

from __future__ import annotations
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import logging

from .constraint import Constraint, Deduction, SolvedState, StateReader
from .element import ElementIdentifier

logger = logging.getLogger(__name__)


@dataclass
class PropagationResult:
    """Output of one refresh pass."""
    cache: dict[ElementIdentifier, SolvedState] = field(default_factory=dict)
    unresolved: set[Constraint] = field(default_factory=set)


def refresh(constraints: Iterable[Constraint], states: StateReader) -> PropagationResult:
    """
    Solve every clue against the same snapshot.

    Successful deductions go into the cache (last write wins per element);
    clues that are not solvable (NO or ALREADY_SOLVED) go into unresolved.
    """
    result = PropagationResult()

    for constraint in constraints:
        outcome = constraint.solve(states)
        if isinstance(outcome, Deduction):
            result.cache[outcome.identifier] = outcome.state
        else:
            result.unresolved.add(constraint)

    logger.debug(
        "Refreshed clues: %d suggestion(s), %d unresolved",
        len(result.cache),
        len(result.unresolved),
    )
    return result


class ConstraintCache:
    """
    Latest propagation result for a session.

    Usage:
        cache = ConstraintCache()
        cache.update(constraints, elements.snapshot())
        cache.suggestion_for(ElementIdentifier(ElementType.LOCATION, 0))
    """

    def __init__(self):
        self._result = PropagationResult()

    def update(self, constraints: Iterable[Constraint], states: StateReader) -> PropagationResult:
        self._result = refresh(constraints, states)
        return self._result

    @property
    def suggestions(self) -> dict[ElementIdentifier, SolvedState]:
        return dict(self._result.cache)

    @property
    def unresolved(self) -> set[Constraint]:
        return set(self._result.unresolved)

    def suggestion_for(self, identifier: ElementIdentifier) -> SolvedState | None:
        return self._result.cache.get(identifier)

    def is_unresolved(self, constraint: Constraint) -> bool:
        return constraint in self._result.unresolved

    def forced(self) -> Iterator[tuple[ElementIdentifier, SolvedState]]:
        """Suggestions that force a value (never ANY)."""
        for identifier, state in self._result.cache.items():
            if state.is_forced:
                yield identifier, state
