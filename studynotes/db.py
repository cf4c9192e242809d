from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool

from studynotes.config import DATABASE_URL
from studynotes import models  # noqa: F401  registers tables on SQLModel.metadata


def _make_engine(url: str):
    if not url.startswith("sqlite"):
        return create_engine(url, echo=False)
    kwargs = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite must share one connection or every session sees an empty database
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, **kwargs)


engine = _make_engine(DATABASE_URL)


def init_db() -> None:
    """Create all tables if they don't exist."""
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
