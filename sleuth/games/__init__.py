"""
Games module - Built-in element sets.

Each board lists the locations, people and weapons of one edition.
Custom sets are loaded from an elements.toml file instead.
"""

from .classic import (
    CLASSIC_LOCATIONS,
    CLASSIC_PEOPLE,
    CLASSIC_WEAPONS,
    BOARDS,
    create_classic_elements,
    create_board,
)

__all__ = [
    "CLASSIC_LOCATIONS",
    "CLASSIC_PEOPLE",
    "CLASSIC_WEAPONS",
    "BOARDS",
    "create_classic_elements",
    "create_board",
]
