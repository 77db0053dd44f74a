"""
Resource loading for furiwake.

Builds ResourceSets from JSON resource files and from the SQLite store,
and writes ResourceSets into the store.

Usage:
    from furiwake.db.connection import get_session, init_db
    from furiwake.loading import load_resources_json, store_resource_set

    resources = load_resources_json("resources.json")
    init_db("furiwake.db")
    with get_session("furiwake.db") as session:
        store_resource_set(session, resources)
        session.commit()
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from furiwake.db.models import (
    KanjiReading,
    KanjiRow,
    SpecialExpressionReading,
    SpecialExpressionRow,
)
from furiwake.kanji import Kanji, SpecialExpression
from furiwake.models import ResourceFile
from furiwake.resources import ResourceSet

logger = logging.getLogger(__name__)


# ============================================================================
# JSON Files
# ============================================================================

def load_resources_json(path: Union[str, Path]) -> ResourceSet:
    """
    Load a resource set from a JSON resource file.

    Args:
        path: Path to the JSON file (see furiwake.models.ResourceFile).

    Returns:
        The loaded ResourceSet.

    Raises:
        FileNotFoundError: If the file does not exist.
        pydantic.ValidationError: If the file is not a valid resource file.
    """
    path = Path(path)
    logger.info(f"Loading resources from {path}")
    resource_file = ResourceFile.model_validate_json(path.read_text(encoding="utf-8"))
    resources = resource_file.to_resource_set()
    logger.info(f"Loaded {resources}")
    return resources


# ============================================================================
# Database Store
# ============================================================================

def _kanji_row(kanji: Kanji, is_name: bool) -> KanjiRow:
    row = KanjiRow(char=kanji.char, is_name=is_name)
    ord_ = 0
    for text in kanji.readings:
        row.readings.append(KanjiReading(text=text, ord=ord_, name_only=False))
        ord_ += 1
    for text in kanji.name_readings:
        row.readings.append(KanjiReading(text=text, ord=ord_, name_only=True))
        ord_ += 1
    return row


def _expression_row(expression: SpecialExpression) -> SpecialExpressionRow:
    row = SpecialExpressionRow(text=expression.text)
    for ord_, text in enumerate(expression.readings):
        row.readings.append(SpecialExpressionReading(text=text, ord=ord_))
    return row


def store_resource_set(session: Session, resources: ResourceSet, replace: bool = True) -> Dict[str, int]:
    """
    Write a resource set into the database.

    The session is flushed but not committed.

    Args:
        session: Database session.
        resources: Resources to store.
        replace: Delete the existing resources first.

    Returns:
        Number of rows added per table.
    """
    if replace:
        session.execute(delete(KanjiReading))
        session.execute(delete(KanjiRow))
        session.execute(delete(SpecialExpressionReading))
        session.execute(delete(SpecialExpressionRow))

    counts = {'kanji': 0, 'name_kanji': 0, 'expressions': 0}
    for kanji in resources.kanji:
        session.add(_kanji_row(kanji, is_name=False))
        counts['kanji'] += 1
    for kanji in resources.name_kanji:
        session.add(_kanji_row(kanji, is_name=True))
        counts['name_kanji'] += 1
    for expression in resources.expressions:
        session.add(_expression_row(expression))
        counts['expressions'] += 1

    session.flush()
    logger.info(f"Stored {counts['kanji']} kanji, {counts['name_kanji']} name kanji "
                f"and {counts['expressions']} expressions")
    return counts


def load_resource_set(session: Session) -> ResourceSet:
    """
    Load the resource set stored in the database.

    Args:
        session: Database session.

    Returns:
        The stored ResourceSet.
    """
    kanji: List[Kanji] = []
    name_kanji: List[Kanji] = []
    rows = session.execute(
        select(KanjiRow).options(selectinload(KanjiRow.readings)).order_by(KanjiRow.id)
    ).scalars()
    for row in rows:
        readings = [r.text for r in row.readings if not r.name_only]
        name_readings = [r.text for r in row.readings if r.name_only]
        profile = Kanji.of(row.char, readings, name_readings)
        (name_kanji if row.is_name else kanji).append(profile)

    expressions = [
        SpecialExpression.of(row.text, [r.text for r in row.readings])
        for row in session.execute(
            select(SpecialExpressionRow)
            .options(selectinload(SpecialExpressionRow.readings))
            .order_by(SpecialExpressionRow.id)
        ).scalars()
    ]

    resources = ResourceSet(kanji=kanji, expressions=expressions, name_kanji=name_kanji)
    logger.info(f"Loaded {resources} from database")
    return resources
