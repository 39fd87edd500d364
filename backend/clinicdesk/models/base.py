import sqlite3
from datetime import datetime

from sqlalchemy import Column, DateTime, create_engine, event, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _connect_args(database_url: str) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def make_engine(database_url: str, **kwargs) -> Engine:
    return create_engine(database_url, connect_args=_connect_args(database_url), **kwargs)


@event.listens_for(Engine, "connect")
def _configure_sqlite(dbapi_connection, connection_record):
    # SQLite ships with foreign key enforcement off and an ASCII case-blind LIKE
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.close()


class TimestampMixin:
    created_at = Column(DateTime, nullable=False, default=datetime.now, server_default=func.now())


def init_db(bind: Engine) -> None:
    """Create missing tables. Production deployments run alembic instead."""
    Base.metadata.create_all(bind=bind)
