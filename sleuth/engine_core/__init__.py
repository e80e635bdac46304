"""
Engine Core - Element registry, clue language and deduction.

The engine:
1. Holds the player's knowledge in an element registry
2. Parses clue text into validated Constraints
3. Checks whether a clue has a single unresolved element
4. Derives that element's forced state
5. Re-evaluates all clues into an advisory cache
"""

from .element import (
    ElementType,
    ElementState,
    ElementIdentifier,
    Element,
    Elements,
    StateSnapshot,
)
from .errors import (
    ProcessResult,
    ConstraintParseError,
    InvariantViolation,
    RegistryLoadError,
)
from .tokens import Ops, OpToken, LeafToken, TreeToken, Token, flatten_tree
from .tokenizer import tokenize
from .tree import build_tree
from .constraint import (
    Constraint,
    Deduction,
    Solvable,
    SolvableKind,
    SolvedState,
)
from .propagation import ConstraintCache, PropagationResult, refresh

__all__ = [
    "ElementType",
    "ElementState",
    "ElementIdentifier",
    "Element",
    "Elements",
    "StateSnapshot",
    "ProcessResult",
    "ConstraintParseError",
    "InvariantViolation",
    "RegistryLoadError",
    "Ops",
    "OpToken",
    "LeafToken",
    "TreeToken",
    "Token",
    "flatten_tree",
    "tokenize",
    "build_tree",
    "Constraint",
    "Deduction",
    "Solvable",
    "SolvableKind",
    "SolvedState",
    "ConstraintCache",
    "PropagationResult",
    "refresh",
]
