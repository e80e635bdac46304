"""
Classic board - The standard edition's 9 rooms, 6 suspects and 6 weapons.

Hand-authored; used when no elements file is given.
"""

from ..engine_core.element import Elements

CLASSIC_LOCATIONS = [
    "Kitchen",
    "Ballroom",
    "Conservatory",
    "Dining Room",
    "Billiard Room",
    "Library",
    "Lounge",
    "Hall",
    "Study",
]

CLASSIC_PEOPLE = [
    "Miss Scarlett",
    "Colonel Mustard",
    "Mrs. White",
    "Reverend Green",
    "Mrs. Peacock",
    "Professor Plum",
]

CLASSIC_WEAPONS = [
    "Candlestick",
    "Dagger",
    "Lead Pipe",
    "Revolver",
    "Rope",
    "Wrench",
]


def create_classic_elements() -> Elements:
    """Create a fresh registry for the classic board, all UNKNOWN."""
    return Elements.from_names(
        locations=list(CLASSIC_LOCATIONS),
        people=list(CLASSIC_PEOPLE),
        weapons=list(CLASSIC_WEAPONS),
    )


BOARDS = {
    "classic": create_classic_elements,
}


def create_board(name: str) -> Elements:
    """Create a registry for a built-in board by name."""
    factory = BOARDS.get(name)
    if factory is None:
        raise ValueError(f"Unknown board: {name}")
    return factory()
