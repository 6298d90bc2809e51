# backend/constructiq/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from .config import settings
from .utils.logging import db_logger

Base = declarative_base()


def build_engine(url: str | None = None) -> Engine:
    """Create the engine for the relational store, with SQLite-friendly defaults"""
    database_url = str(url or settings.DATABASE_URL)
    db_logger.info(f"Connecting to database: {database_url}")

    options = {}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            options["poolclass"] = StaticPool  # one shared in-memory database

    return create_engine(database_url, echo=False, **options)


def build_session_factory(engine: Engine) -> sessionmaker:
    # Importing the models registers every table on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
