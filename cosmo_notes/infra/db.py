from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from cosmo_notes.config import SETTINGS


def create_db_engine(database_url: str, **kwargs) -> Engine:
    """Build the engine shared by request handlers and the overdue sweep thread."""
    if make_url(database_url).get_backend_name() == "sqlite":
        # sessions are opened on the sweep thread as well as request threads
        connect_args = dict(kwargs.pop("connect_args", {}))
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    kwargs.setdefault("pool_pre_ping", True)
    return create_engine(database_url, **kwargs)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, autocommit=False)


engine = create_db_engine(SETTINGS.database_url)
SessionLocal = make_session_factory(engine)
Base = declarative_base()


def init_db(bind: Engine | None = None) -> None:
    with (bind or engine).connect() as connection:
        connection.execute(text("SELECT 1"))
