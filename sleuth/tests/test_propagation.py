"""
Tests for the propagation cache.
"""

from ..engine_core.constraint import Constraint, SolvedState
from ..engine_core.element import ElementIdentifier, ElementState, ElementType
from ..engine_core.propagation import ConstraintCache, refresh

L1 = ElementIdentifier(ElementType.LOCATION, 0)
L2 = ElementIdentifier(ElementType.LOCATION, 1)
P1 = ElementIdentifier(ElementType.PERSON, 0)


class TestRefresh:
    """Tests for refresh()."""

    def test_solved_and_unresolved(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.DISMISSED)
        solvable = Constraint.parse("w1 | l1")
        open_clue = Constraint.parse("p1 | p2")

        result = refresh([solvable, open_clue], small_elements.snapshot())

        assert result.cache == {L1: SolvedState.CONFIRMED}
        assert result.unresolved == {open_clue}

    def test_already_solved_goes_unresolved(self, small_elements, knife, kitchen):
        small_elements.set_state(knife, ElementState.DISMISSED)
        small_elements.set_state(kitchen, ElementState.CONFIRMED)
        clue = Constraint.parse("w1 | l1")

        result = refresh([clue], small_elements.snapshot())

        assert result.cache == {}
        assert result.unresolved == {clue}

    def test_any_is_cached(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.CONFIRMED)
        result = refresh([Constraint.parse("w1 | p1")], small_elements.snapshot())
        assert result.cache == {P1: SolvedState.ANY}

    def test_last_write_wins(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.DISMISSED)
        small_elements.set_state(ElementIdentifier(ElementType.WEAPON, 1), ElementState.CONFIRMED)
        forced = Constraint.parse("w1 | l1")
        satisfied = Constraint.parse("w2 | l1")
        snap = small_elements.snapshot()

        assert refresh([forced, satisfied], snap).cache[L1] == SolvedState.ANY
        assert refresh([satisfied, forced], snap).cache[L1] == SolvedState.CONFIRMED

    def test_idempotent(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.DISMISSED)
        clues = [Constraint.parse("w1 | l1"), Constraint.parse("p1 | l2"), Constraint.parse("w1 | w2")]
        snap = small_elements.snapshot()

        first = refresh(clues, snap)
        second = refresh(clues, snap)

        assert first.cache == second.cache
        assert first.unresolved == second.unresolved

    def test_never_writes_registry(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.DISMISSED)
        refresh([Constraint.parse("w1 | l1")], small_elements.snapshot())
        assert small_elements.get_state(L1) == ElementState.UNKNOWN

    def test_empty(self, small_elements):
        result = refresh([], small_elements.snapshot())
        assert result.cache == {}
        assert result.unresolved == set()


class TestConstraintCache:
    """Tests for ConstraintCache."""

    def test_update_and_query(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.DISMISSED)
        clue = Constraint.parse("w1 | l1")
        other = Constraint.parse("p1 | l2")
        cache = ConstraintCache()

        cache.update([clue, other], small_elements.snapshot())

        assert cache.suggestion_for(L1) == SolvedState.CONFIRMED
        assert cache.suggestion_for(L2) is None
        assert cache.is_unresolved(other)
        assert not cache.is_unresolved(clue)

    def test_forced_skips_any(self, small_elements, knife):
        small_elements.set_state(knife, ElementState.CONFIRMED)
        small_elements.set_state(ElementIdentifier(ElementType.WEAPON, 1), ElementState.DISMISSED)
        cache = ConstraintCache()

        cache.update(
            [Constraint.parse("w1 | p1"), Constraint.parse("w2 | l2")],
            small_elements.snapshot(),
        )

        assert dict(cache.forced()) == {L2: SolvedState.CONFIRMED}

    def test_update_replaces_previous(self, small_elements, knife):
        cache = ConstraintCache()
        small_elements.set_state(knife, ElementState.DISMISSED)
        cache.update([Constraint.parse("w1 | l1")], small_elements.snapshot())

        cache.update([], small_elements.snapshot())

        assert cache.suggestions == {}
        assert cache.unresolved == set()
