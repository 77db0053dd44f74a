"""SQLite resource store for furiwake."""

from furiwake.db.connection import get_db_path, get_engine, get_session, init_db
from furiwake.db.models import (
    Base,
    KanjiReading,
    KanjiRow,
    SpecialExpressionReading,
    SpecialExpressionRow,
)

__all__ = [
    'Base',
    'KanjiRow',
    'KanjiReading',
    'SpecialExpressionRow',
    'SpecialExpressionReading',
    'get_db_path',
    'get_engine',
    'get_session',
    'init_db',
]
