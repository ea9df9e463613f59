"""Database engine and session construction."""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, Engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session, declarative_base

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for a SQLite URL (in-memory URLs share one connection)."""
    kwargs = {}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite-specific
        echo=False,
        **kwargs,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def init_db(engine: Engine) -> None:
    """Create tables if they do not exist."""
    from stockscope.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def open_session(database_url: str, db_path: Optional[Path] = None) -> tuple[Engine, Session]:
    """
    Create engine, schema and a session in one step.

    Args:
        database_url: SQLAlchemy URL; ignored when db_path is given
        db_path: Optional SQLite file path
    """
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        database_url = f"sqlite:///{db_path}"
    engine = create_db_engine(database_url)
    init_db(engine)
    return engine, create_session_factory(engine)()
