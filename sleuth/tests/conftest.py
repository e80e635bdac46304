"""
Pytest fixtures for Sleuth tests.
"""

import pytest

from ..engine_core.element import Elements, ElementIdentifier, ElementType
from ..games import create_classic_elements
from ..session import SessionManager, Session


@pytest.fixture
def small_elements() -> Elements:
    """Two elements per category, all UNKNOWN."""
    return Elements.from_names(
        locations=["Kitchen", "Library"],
        people=["Green", "White"],
        weapons=["Knife", "Rope"],
    )


@pytest.fixture
def classic_elements() -> Elements:
    return create_classic_elements()


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()


@pytest.fixture
def session(session_manager: SessionManager, small_elements: Elements) -> Session:
    """Session over the small registry."""
    return session_manager.create_session(small_elements, board_name="small")


@pytest.fixture
def knife() -> ElementIdentifier:
    return ElementIdentifier(ElementType.WEAPON, 0)


@pytest.fixture
def kitchen() -> ElementIdentifier:
    return ElementIdentifier(ElementType.LOCATION, 0)
