# backend/constructiq/persistence/__init__.py
from typing import Optional

from ..config import Settings, settings as default_settings
from ..database import build_engine, build_session_factory
from ..utils.logging import db_logger
from .base import PersistenceAdapter
from .local import FileKeyValueStorage, LocalAdapter
from .remote import RemoteAdapter


def build_adapter(config: Optional[Settings] = None) -> PersistenceAdapter:
    """Create the adapter selected by PERSISTENCE_BACKEND"""
    config = config or default_settings
    backend = config.PERSISTENCE_BACKEND
    db_logger.info(f"Using {backend} persistence")

    if backend == "local":
        return LocalAdapter(FileKeyValueStorage(config.LOCAL_STORE_PATH), prefix=config.STORAGE_KEY_PREFIX)
    if backend == "remote":
        return RemoteAdapter(build_session_factory(build_engine(config.DATABASE_URL)))
    raise ValueError(f"Unsupported persistence backend: {backend}")


__all__ = ["PersistenceAdapter", "FileKeyValueStorage", "LocalAdapter", "RemoteAdapter", "build_adapter"]
