"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from src.core.models import MatchModel
from src.core.shared_types import Status
from src.db import database
from src.db.database import create_session_factory
from src.db.sql_repository import SQLMatchRepository

ALICE = {"user_id": "alice", "username": "Alice", "color": "white", "player_order": 1}
BOB = {"user_id": "bob", "username": "Bob", "color": "black", "player_order": 2}


def mock_match(**overrides: object) -> MatchModel:
    fields: dict = {
        "game_type": "checkers",
        "status": Status.WAITING.value,
        "board_state": '{"board":[],"mustCapture":false,"chainCapture":null}',
        "players": [ALICE],
        "settings": {"target_score": 50},
    }
    fields.update(overrides)
    return MatchModel(**fields)


def test_create_match(db_session_repo: Session) -> None:
    """Conversion from a MatchModel to DBMatch for a new entry to the database."""
    model = mock_match()

    repo = SQLMatchRepository(db_session_repo)
    record_in_db, _ = repo.create_match(model)
    assert isinstance(record_in_db, MatchModel)
    assert record_in_db == model


def test_get_match_by_id(db_session_repo: Session) -> None:
    """Create a match, then fetch it from db."""
    repo = SQLMatchRepository(db_session_repo)
    expected_match, match_id = repo.create_match(mock_match())
    match_found = repo.get_match(match_id)
    assert isinstance(match_found, MatchModel)
    assert match_found == expected_match


def test_get_unknown_match(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLMatchRepository(db_session_repo)
    assert repo.get_match(uuid4()) is None

    # Now do it with creating a match, but retrieving from the wrong ID
    repo.create_match(mock_match())
    assert repo.get_match(uuid4()) is None


def test_consecutive_match_updates(db_session_repo: Session) -> None:
    """Tests that we can successfully make multiple updates to the same match (join, then moves)."""
    repo = SQLMatchRepository(db_session_repo)
    _, match_id = repo.create_match(mock_match())

    joined = mock_match(
        status=Status.ACTIVE.value, players=[ALICE, BOB], current_player_id="alice"
    )
    first_move = mock_match(
        status=Status.ACTIVE.value,
        players=[ALICE, BOB],
        current_player_id="bob",
        move_count=1,
        board_state='{"board":[["w"]],"mustCapture":false,"chainCapture":null}',
    )
    finished = mock_match(
        status=Status.COMPLETED.value,
        players=[ALICE, BOB],
        current_player_id=None,
        move_count=2,
        winner="bob",
    )

    assert repo.update_match(match_id, joined) == joined
    assert repo.update_match(match_id, first_move) == first_move
    repo.update_match(match_id, finished)

    after_all_updates = repo.get_match(match_id)
    assert after_all_updates is not None
    assert after_all_updates == finished


def test_attempt_updating_unknown_match(db_session_repo: Session) -> None:
    """the update_match() method should break early and return None"""
    repo = SQLMatchRepository(db_session_repo)
    assert repo.update_match(uuid4(), mock_match()) is None


def test_delete_match(db_session_repo: Session) -> None:
    """Record of the match should no longer exist after deletion"""
    repo = SQLMatchRepository(db_session_repo)
    created_match, match_id = repo.create_match(mock_match())
    deleted_match = repo.delete_match(match_id)

    # the correct match should be deleted
    assert deleted_match == created_match

    # The match should no longer be available in db
    assert repo.get_match(match_id) is None


def test_attempt_deleting_unknown_match(db_session_repo: Session) -> None:
    repo = SQLMatchRepository(db_session_repo)
    assert repo.delete_match(uuid4()) is None


def test_session_factory_creates_tables() -> None:
    """A fresh database gets the matches table on first use."""
    session_factory = create_session_factory("sqlite:///:memory:", echo=False)
    with session_factory() as session:
        repo = SQLMatchRepository(session)
        _, match_id = repo.create_match(mock_match())
        assert repo.get_match(match_id) == mock_match()


def test_get_db_yields_a_session(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(database, "_session_factory", create_session_factory("sqlite:///:memory:"))
    sessions = database.get_db()
    session = next(sessions)
    assert isinstance(session, Session)
    sessions.close()
