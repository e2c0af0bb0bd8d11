"""Database connection management and initialization."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from volunteer_match.storage.models import Base


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLAlchemy engine for a SQLite file.

    Args:
        db_path: Path to the database file. Parent directories are created.

    Returns:
        SQLAlchemy Engine instance.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Open a session that commits on success and always closes.

    Yields:
        SQLAlchemy Session instance.
    """
    session = sessionmaker(bind=engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> Engine:
    """Initialize the database by creating all tables.

    Args:
        engine: Engine to initialize.

    Returns:
        The initialized engine.
    """
    Base.metadata.create_all(engine)
    return engine
