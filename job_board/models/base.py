"""SQLAlchemy engine and session setup."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


def sqlite_url(db_path: str) -> str:
    return f"sqlite:///{Path(db_path)}"


def create_db_engine(db_path: str) -> Engine:
    """Create an engine for a SQLite file, creating its directory if needed."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        sqlite_url(db_path),
        connect_args={"check_same_thread": False},
        echo=False,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
