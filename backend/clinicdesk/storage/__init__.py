import logging

from fastapi import Request

from ..core.config import Settings
from .base import Storage, StorageError, UnknownPatientError, today_window
from .memory import MemStorage
from .database import DatabaseStorage

logger = logging.getLogger(__name__)

__all__ = [
    "Storage",
    "StorageError",
    "UnknownPatientError",
    "MemStorage",
    "DatabaseStorage",
    "build_storage",
    "get_storage",
    "today_window",
]


def build_storage(config: Settings) -> Storage:
    """Instantiate the backend named by ``STORAGE_BACKEND``."""
    backend = config.STORAGE_BACKEND.lower()
    if backend == "memory":
        logger.info("Using in-memory storage; records are lost on restart")
        return MemStorage()
    if backend == "database":
        from sqlalchemy.orm import sessionmaker
        from ..models.base import make_engine, init_db

        engine = make_engine(config.DATABASE_URL)
        init_db(engine)
        logger.info("Using database storage at %s", engine.url.render_as_string(hide_password=True))
        return DatabaseStorage(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    raise ValueError(f"Unknown STORAGE_BACKEND {config.STORAGE_BACKEND!r}. Choose from: memory, database")


def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the application's storage backend."""
    return request.app.state.storage
