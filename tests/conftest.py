"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import Color, GameType, Status
from src.db.schema import Base
from src.games.match import Match, Player
from src.games.registry import reset_game_registry

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture(autouse=True)
def fresh_game_registry() -> Generator[None, None, None]:
    """Runtime registrations on the default registry must not leak into other tests."""
    reset_game_registry()
    yield
    reset_game_registry()


# --- MATCHES WITH SEATED PLAYERS ---
@pytest.fixture
def two_player_match() -> Match:
    """Active board game match: alice plays white (first seat), bob plays black."""
    return Match(
        game_type=GameType.CHECKERS,
        status=Status.ACTIVE,
        current_player_id="alice",
        players=[
            Player("alice", "Alice", Color.WHITE, 1),
            Player("bob", "Bob", Color.BLACK, 2),
        ],
    )


@pytest.fixture
def hearts_match() -> Match:
    """Active Hearts match, seats 0-3 are p1-p4."""
    colors = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)
    return Match(
        game_type=GameType.HEARTS,
        status=Status.ACTIVE,
        current_player_id="p1",
        players=[
            Player(f"p{order}", f"Player {order}", color, order)
            for order, color in enumerate(colors, start=1)
        ],
        min_players=4,
        max_players=4,
    )
