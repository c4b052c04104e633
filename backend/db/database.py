from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str, echo: bool = False) -> Engine:
    """Build an engine; SQLite connections are shared with FastAPI's worker threads."""
    kwargs = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            # one connection, otherwise every session sees a fresh empty database
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = make_engine(settings.database_url, settings.database_echo)
session_maker = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_db_and_tables(bind: Engine = engine) -> None:
    # register the mapped tables before create_all
    from . import collection  # noqa: F401

    Base.metadata.create_all(bind)
