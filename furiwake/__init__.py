"""
Furiwake: furigana alignment for Japanese words.

Splits a word's reading over its written form: each run of kanji gets
the part of the reading it is pronounced with, and the word is left
unannotated when no split, or more than one, reproduces the reading.
"""

from typing import Optional

from furiwake.entry import Entry, EntryKind, InvalidEntryError
from furiwake.output import Segment, TextSolution
from furiwake.resources import ResourceSet
from furiwake.solver import Solver

__version__ = "0.1.0"

__all__ = [
    'Entry',
    'EntryKind',
    'InvalidEntryError',
    'ResourceSet',
    'Segment',
    'Solver',
    'TextSolution',
    'solve',
]


def solve(
    written: str,
    reading: str,
    resources: Optional[ResourceSet] = None,
    is_name: bool = False,
    session=None,
) -> Optional[TextSolution]:
    """
    Annotate a single word with furigana.

    This is the main high-level API. For many words, create a Solver once
    and reuse it so the candidate cache is shared.

    Args:
        written: Written form, e.g. '大人'.
        reading: Reading, e.g. 'おとな'.
        resources: Resources to solve against. If None, they are loaded
            from the database (session, or the configured database).
        is_name: Allow the name readings of kanji.
        session: Optional database session used when resources is None.

    Returns:
        The TextSolution, or None if the word is unsolved or ambiguous.

    Example:
        >>> import furiwake
        >>> resources = furiwake.ResourceSet.from_mappings(expressions={'大人': ['おとな']})
        >>> str(furiwake.solve('大人', 'おとな', resources))
        '[大人|おとな]'
    """
    if resources is None:
        from furiwake.db.connection import get_session as _get_session
        from furiwake.loading import load_resource_set

        if session is None:
            with _get_session() as own_session:
                resources = load_resource_set(own_session)
        else:
            resources = load_resource_set(session)

    return Solver(resources).solve_text(written, reading, is_name=is_name)
