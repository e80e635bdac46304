"""
Sleuth - Deduction assistant for Clue-style board games.

Players record disjunctive clues ("at least one of these cards is in the
envelope") and the engine reports which clues currently force a value:
- Element registry with tri-state knowledge
- Clue language (tokenizer + tree builder)
- Single-clue deduction
- Advisory propagation cache
"""

__version__ = "0.1.0"
