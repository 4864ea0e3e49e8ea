"""Generate database sessions"""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base

_session_factory: Optional[sessionmaker[Session]] = None


def create_session_factory(
    database_url: Optional[str] = None, echo: Optional[bool] = None
) -> sessionmaker[Session]:
    """Engine + session factory for the given URL (default: from the settings). Ensures all tables are created."""
    settings = get_settings()
    engine = create_engine(
        database_url or settings.database_url,
        echo=settings.database_echo if echo is None else echo,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db() -> Generator[Session, None, None]:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()

    db = _session_factory()
    try:
        yield db
    finally:
        db.close()
