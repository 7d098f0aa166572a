"""
Database engine and session management
"""

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from notus.core.config import settings

MEMORY_SQLITE_URLS = {"sqlite://", "sqlite:///:memory:"}


def engine_options(database_url: str, echo: bool = False) -> Dict[str, Any]:
    """create_engine keyword arguments for a notus store URL"""
    options: Dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        # Request handlers and the chat graph share sessions across threads
        options["connect_args"] = {"check_same_thread": False}
        if database_url in MEMORY_SQLITE_URLS or database_url.endswith(":memory:"):
            # One connection, or every session sees its own empty database
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    return options


def build_engine(database_url: str, echo: bool = False) -> Engine:
    return create_engine(database_url, **engine_options(database_url, echo=echo))


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

SessionLocal = build_session_factory(engine)

Base = declarative_base()
