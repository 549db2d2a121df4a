from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import SETTINGS

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, autocommit=False)


engine = build_engine(SETTINGS.database_url)
SessionLocal = build_session_factory(engine)


def init_db(bind: Engine | None = None) -> None:
    from . import models  # noqa: F401

    target = bind or engine
    with target.connect() as connection:
        connection.execute(text("SELECT 1"))
    Base.metadata.create_all(target)
