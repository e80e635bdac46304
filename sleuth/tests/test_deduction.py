"""
Tests for single-clue deduction.

Tests:
- solvable() verdicts
- solve() decision table
- Soundness of forced values
- Invariant violations
"""

import itertools

import pytest

from ..engine_core.constraint import (
    Constraint,
    Deduction,
    Solvable,
    SolvableKind,
    SolvedState,
)
from ..engine_core.element import ElementIdentifier, ElementState, ElementType, StateSnapshot
from ..engine_core.errors import InvariantViolation

W1 = ElementIdentifier(ElementType.WEAPON, 0)
L1 = ElementIdentifier(ElementType.LOCATION, 0)
L3 = ElementIdentifier(ElementType.LOCATION, 2)
P5 = ElementIdentifier(ElementType.PERSON, 4)

C = ElementState.CONFIRMED
X = ElementState.DISMISSED
U = ElementState.UNKNOWN


def snapshot(**states) -> StateSnapshot:
    """snapshot(w1=C, l3=X) -> StateSnapshot."""
    return StateSnapshot({
        ElementIdentifier.parse(name): state for name, state in states.items()
    })


class _DismissEverything(StateSnapshot):
    """Snapshot whose hypotheses read every element as dismissed."""

    def with_state(self, identifier, state):
        return StateSnapshot({W1: X, L3: X})


class TestSolvable:
    """Tests for the pre-check."""

    def test_two_unknown_is_no(self):
        constraint = Constraint.parse("w1 | l3 | p5")
        assert constraint.solvable(snapshot(p5=X)) == Solvable.no()

    def test_all_fixed_is_already_solved(self):
        constraint = Constraint.parse("w1 | l3")
        assert constraint.solvable(snapshot(w1=X, l3=C)) == Solvable.already_solved()

    def test_one_unknown_is_yes(self):
        constraint = Constraint.parse("w1 | l3 | p5")
        verdict = constraint.solvable(snapshot(w1=X, p5=X))

        assert verdict.is_yes
        assert verdict.identifier == L3

    def test_no_carries_no_identifier(self):
        verdict = Constraint.parse("w1 | l3").solvable(StateSnapshot())
        assert verdict.kind == SolvableKind.NO
        assert verdict.identifier is None

    def test_out_of_range_reads_unknown(self, small_elements):
        """w9 does not exist in a 2-weapon registry and counts as unresolved."""
        small_elements.set_state(L1, C)
        verdict = Constraint.parse("w9 | l1").solvable(small_elements)

        assert verdict == Solvable.yes(ElementIdentifier(ElementType.WEAPON, 8))

    def test_accepts_registry(self, small_elements):
        small_elements.set_state(W1, X)
        verdict = Constraint.parse("w1 | l1").solvable(small_elements)
        assert verdict == Solvable.yes(L1)

    @pytest.mark.parametrize("states", list(itertools.product([U, C, X], repeat=3)))
    def test_verdict_matches_unknown_count(self, states):
        constraint = Constraint.parse("w1 | l3 | p5")
        snap = StateSnapshot(dict(zip([W1, L3, P5], states)))
        unknown = [i for i, s in zip([W1, L3, P5], states) if s == U]

        verdict = constraint.solvable(snap)

        if len(unknown) >= 2:
            assert verdict == Solvable.no()
        elif not unknown:
            assert verdict == Solvable.already_solved()
        else:
            assert verdict == Solvable.yes(unknown[0])


class TestSolve:
    """Tests for solve() and the decision table."""

    def test_forced_confirmed(self):
        """Every other leaf is false: the remaining one must be true."""
        result = Constraint.parse("w1 | l3 | p5").solve(snapshot(w1=X, p5=X))
        assert result == Deduction(L3, SolvedState.CONFIRMED)

    def test_any_when_other_leaf_true(self):
        result = Constraint.parse("w1 | l3").solve(snapshot(w1=C))
        assert result == Deduction(L3, SolvedState.ANY)

    def test_not_solvable_is_returned(self):
        result = Constraint.parse("w1 | l3").solve(StateSnapshot())
        assert result == Solvable.no()

    def test_already_solved_is_returned(self):
        result = Constraint.parse("w1 | l3").solve(snapshot(w1=C, l3=X))
        assert result == Solvable.already_solved()

    def test_solve_does_not_mutate_snapshot(self):
        snap = snapshot(w1=X)
        Constraint.parse("w1 | l3").solve(snap)
        assert snap.get_state(L3) == U

    def test_solve_does_not_mutate_registry(self, small_elements):
        small_elements.set_state(W1, X)
        result = Constraint.parse("w1 | l1").solve(small_elements)

        assert result == Deduction(L1, SolvedState.CONFIRMED)
        assert small_elements.get_state(L1) == U

    def test_duplicate_leaf_counts_twice(self):
        """The same element written twice is two unresolved leaves."""
        result = Constraint.parse("w1 | w1").solve(StateSnapshot())
        assert result == Solvable.no()

    @pytest.mark.parametrize("others", list(itertools.product([C, X], repeat=2)))
    def test_soundness(self, others):
        """A forced value is the only one that keeps the clue true."""
        constraint = Constraint.parse("w1 | l3 | p5")
        snap = StateSnapshot({W1: others[0], P5: others[1]})

        result = constraint.solve(snap)
        assert isinstance(result, Deduction)
        assert result.identifier == L3

        with_true = constraint.evaluate(snap.with_state(L3, C))
        with_false = constraint.evaluate(snap.with_state(L3, X))

        if result.state == SolvedState.CONFIRMED:
            assert with_true and not with_false
        elif result.state == SolvedState.DISMISSED:
            assert with_false and not with_true
        else:
            assert C in others

    def test_false_both_ways_raises(self):
        """A clue false under both hypotheses is a broken tree."""
        constraint = Constraint.parse("w1 | l3")

        with pytest.raises(InvariantViolation, match="both confirmed and dismissed"):
            constraint.solve(_DismissEverything({W1: X}))


class TestEvaluate:
    """Tests for full evaluation."""

    def test_or_semantics(self):
        constraint = Constraint.parse("w1 | l3")
        assert constraint.evaluate(snapshot(w1=X, l3=C)) is True
        assert constraint.evaluate(snapshot(w1=X, l3=X)) is False

    def test_unknown_leaf_is_invariant_violation(self):
        with pytest.raises(InvariantViolation):
            Constraint.parse("w1 | l3").evaluate(snapshot(w1=X))


class TestSolvedState:
    def test_element_state_mapping(self):
        assert SolvedState.CONFIRMED.as_element_state() == C
        assert SolvedState.DISMISSED.as_element_state() == X
        assert SolvedState.ANY.as_element_state() is None
        assert not SolvedState.ANY.is_forced


class TestEndToEnd:
    """Scenarios over the small registry."""

    def test_dismissed_weapon_forces_location(self, small_elements, knife, kitchen):
        small_elements.set_state(knife, X)
        constraint = Constraint.parse("w1 | l1")
        snap = small_elements.snapshot()

        assert [snap.get_state(i) for i in constraint.leaves()] == [X, U]
        assert constraint.solvable(snap) == Solvable.yes(kitchen)
        assert constraint.solve(snap) == Deduction(kitchen, SolvedState.CONFIRMED)

    def test_confirmed_location_already_solved(self, small_elements, knife, kitchen):
        small_elements.set_state(knife, X)
        small_elements.set_state(kitchen, C)
        constraint = Constraint.parse("w1 | l1")
        snap = small_elements.snapshot()

        assert constraint.solvable(snap) == Solvable.already_solved()
        assert constraint.solve(snap) == Solvable.already_solved()
