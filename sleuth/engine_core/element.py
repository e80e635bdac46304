"""
Element Registry - The player's knowledge sheet.

Three fixed categories (locations, people, weapons), each an ordered list
of named elements with a tri-state knowledge value.

Design principles:
- The registry is the only authoritative store of element states
- Mutation happens through set_state() / process_action() only
- The deduction engine never sees the registry itself, only an
  immutable StateSnapshot taken from it
"""

from __future__ import annotations
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
import tomllib

from .errors import ProcessResult, RegistryLoadError


class ElementType(Enum):
    """Element categories, keyed by the letter used in clues and commands."""
    WEAPON = "w"
    LOCATION = "l"
    PERSON = "p"

    @property
    def letter(self) -> str:
        return self.value

    @classmethod
    def from_letter(cls, letter: str) -> ElementType | None:
        """Category for a clue letter (case-sensitive), or None."""
        for element_type in cls:
            if element_type.value == letter:
                return element_type
        return None


class ElementState(Enum):
    """Knowledge about a single element."""
    UNKNOWN = "unknown"
    CONFIRMED = "confirmed"
    DISMISSED = "dismissed"

    def as_char(self) -> str:
        return {
            ElementState.UNKNOWN: "?",
            ElementState.CONFIRMED: "C",
            ElementState.DISMISSED: "X",
        }[self]


@dataclass(frozen=True)
class ElementIdentifier:
    """
    (category, zero-based index) reference to one element.

    Renders with a 1-based index: ElementIdentifier(LOCATION, 2) -> "l3".
    """
    element_type: ElementType
    index: int

    def __str__(self) -> str:
        return f"{self.element_type.letter}{self.index + 1}"

    @classmethod
    def parse(cls, text: str) -> ElementIdentifier | None:
        """Parse "l3" style references. Returns None if malformed."""
        text = text.strip()
        if not text:
            return None
        element_type = ElementType.from_letter(text[0])
        digits = _leading_digits(text[1:])
        if element_type is None or not digits or len(digits) != len(text) - 1:
            return None
        return cls(element_type, max(int(digits) - 1, 0))


@dataclass
class Element:
    """A named element and the player's current knowledge of it."""
    name: str
    state: ElementState = ElementState.UNKNOWN


@dataclass(frozen=True)
class StateSnapshot:
    """
    Read-only view of element states at one point in time.

    Identifiers missing from the snapshot (including out-of-range ones)
    read as UNKNOWN.
    """
    states: Mapping[ElementIdentifier, ElementState] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self):
        object.__setattr__(self, "states", MappingProxyType(dict(self.states)))

    def get_state(self, identifier: ElementIdentifier) -> ElementState:
        return self.states.get(identifier, ElementState.UNKNOWN)

    def with_state(self, identifier: ElementIdentifier, state: ElementState) -> StateSnapshot:
        """Return a new snapshot differing only in one element's state."""
        new_states = dict(self.states)
        new_states[identifier] = state
        return StateSnapshot(new_states)

    def __len__(self) -> int:
        return len(self.states)


@dataclass
class Elements:
    """
    The element registry.

    Lists are kept in file order; an element's position is its identifier
    index.
    """
    locations: list[Element] = field(default_factory=list)
    people: list[Element] = field(default_factory=list)
    weapons: list[Element] = field(default_factory=list)

    @property
    def max_name_length(self) -> int:
        names = [element.name for _, element in self.iter_elements()]
        return max((len(name) for name in names), default=0)

    @classmethod
    def from_names(
        cls,
        locations: list[str],
        people: list[str],
        weapons: list[str],
    ) -> Elements:
        """Build a registry with every element UNKNOWN."""
        return cls(
            locations=[Element(name) for name in locations],
            people=[Element(name) for name in people],
            weapons=[Element(name) for name in weapons],
        )

    @classmethod
    def load(cls, path: str | Path) -> Elements:
        """
        Load a registry from a TOML file.

        Expected layout:
            locations = ["Kitchen", "Library"]
            people = ["Green", "White"]
            weapons = ["Knife", "Rope"]

        Non-string entries are skipped.

        Raises:
            RegistryLoadError: file unreadable, invalid TOML, or a missing section
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise RegistryLoadError(f"Cannot read element file {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise RegistryLoadError(f"Invalid TOML in {path}: {e}") from e

        sections = {}
        for section in ("locations", "people", "weapons"):
            values = data.get(section)
            if not isinstance(values, list):
                raise RegistryLoadError(f"Element file {path} has no '{section}' list")
            sections[section] = [v for v in values if isinstance(v, str)]

        return cls.from_names(**sections)

    def section(self, element_type: ElementType) -> list[Element]:
        """Get the element list for a category."""
        if element_type == ElementType.LOCATION:
            return self.locations
        if element_type == ElementType.PERSON:
            return self.people
        return self.weapons

    def get(self, identifier: ElementIdentifier) -> Element | None:
        elements = self.section(identifier.element_type)
        if 0 <= identifier.index < len(elements):
            return elements[identifier.index]
        return None

    def get_state(self, identifier: ElementIdentifier) -> ElementState:
        """State of an element; UNKNOWN for out-of-range identifiers."""
        element = self.get(identifier)
        return element.state if element else ElementState.UNKNOWN

    def set_state(self, identifier: ElementIdentifier, state: ElementState):
        """Set an element's state. Out-of-range identifiers are ignored."""
        element = self.get(identifier)
        if element:
            element.state = state

    def iter_elements(self) -> Iterator[tuple[ElementIdentifier, Element]]:
        """Yield (identifier, element) in display order."""
        for element_type in (ElementType.LOCATION, ElementType.PERSON, ElementType.WEAPON):
            for i, element in enumerate(self.section(element_type)):
                yield ElementIdentifier(element_type, i), element

    def snapshot(self) -> StateSnapshot:
        """Take an immutable snapshot of every element's state."""
        return StateSnapshot({
            identifier: element.state
            for identifier, element in self.iter_elements()
        })

    def process_action(self, inp: str) -> ProcessResult:
        """
        Apply an element state command such as "l2c" or "w1x".

        Format: <section letter><1-based index><state>, state being
        c (confirmed), x (dismissed) or u (back to unknown).
        Incomplete input returns NEXT without changing anything.
        """
        inp = inp.strip()
        if not inp:
            return ProcessResult.NEXT

        element_type = ElementType.from_letter(inp[0])
        if element_type is None:
            return ProcessResult.INVALID_SECTION
        section = self.section(element_type)

        digits = _leading_digits(inp[1:])
        if not digits:
            return ProcessResult.INVALID_INDEX
        index = max(int(digits) - 1, 0)
        if index >= len(section):
            return ProcessResult.INVALID_INDEX

        rest = inp[1 + len(digits):]
        if not rest:
            return ProcessResult.NEXT

        new_state = _STATE_CHARS.get(rest[0])
        if new_state is None:
            return ProcessResult.INVALID_STATE

        section[index].state = new_state
        return ProcessResult.SUCCESS


_STATE_CHARS = {
    "c": ElementState.CONFIRMED,
    "x": ElementState.DISMISSED,
    "u": ElementState.UNKNOWN,
}


def _leading_digits(text: str) -> str:
    digits = []
    for ch in text:
        if not ("0" <= ch <= "9"):
            break
        digits.append(ch)
    return "".join(digits)
