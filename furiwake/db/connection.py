"""
Database connection management for furiwake.

Provides SQLAlchemy engines and sessions for the SQLite resource store.

Usage:
    from furiwake.db.connection import get_session

    with get_session() as session:
        resources = load_resource_set(session)
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session

from furiwake import settings
from furiwake.db.models import Base

logger = logging.getLogger(__name__)

# Engines by database URL, created on first use
_engines: Dict[str, Engine] = {}


def get_db_path() -> Path:
    """Get the configured database path (FURIWAKE_DB_PATH or the default)."""
    return settings.DB_PATH


def _db_url(db_path: Union[str, Path, None]) -> str:
    if db_path is None:
        db_path = get_db_path()
    if str(db_path) == ":memory:":
        return "sqlite://"
    return f"sqlite:///{Path(db_path)}"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def get_engine(db_path: Union[str, Path, None] = None) -> Engine:
    """
    Get the engine for a database file.

    Args:
        db_path: Path to the SQLite database file, or ':memory:'.
            Defaults to settings.DB_PATH.

    Returns:
        A cached SQLAlchemy Engine.
    """
    url = _db_url(db_path)
    engine = _engines.get(url)
    if engine is None:
        engine = create_engine(url)
        event.listen(engine, "connect", _enable_foreign_keys)
        _engines[url] = engine
        logger.debug(f"Created engine for {url}")
    return engine


def get_session(db_path: Union[str, Path, None] = None) -> Session:
    """
    Open a session on a database file.

    The caller closes the session (or uses it as a context manager).
    """
    return Session(get_engine(db_path))


def init_db(db_path: Union[str, Path, None] = None, drop: bool = False) -> Engine:
    """
    Create the resource tables.

    Args:
        db_path: Path to the SQLite database file. Defaults to settings.DB_PATH.
        drop: Drop the existing tables first.

    Returns:
        The engine the tables were created on.
    """
    if db_path is not None and str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    elif db_path is None:
        settings.ensure_data_dirs()

    engine = get_engine(db_path)
    if drop:
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    logger.info(f"Initialized database at {engine.url}")
    return engine


def dispose_engines(db_path: Optional[Union[str, Path]] = None):
    """Dispose of one cached engine, or of all of them."""
    urls = [_db_url(db_path)] if db_path is not None else list(_engines)
    for url in urls:
        engine = _engines.pop(url, None)
        if engine is not None:
            engine.dispose()
