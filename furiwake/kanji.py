"""
Kanji module for furiwake.

Holds the per-character reading profiles and the fixed multi-character
expressions, and derives the full set of phonetically valid readings a
kanji can take at a given position in a word.

Readings use the KANJIDIC notation:
    ワ          on-reading (katakana)
    はなし      kun-reading (hiragana)
    はな.す     stem はな, okurigana す
    -び         suffix-only reading, never at the start of a word
    お-         prefix-only reading, never at the end of a word
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Set, Tuple

from furiwake.characters import (
    AFFIX_MARKER,
    OKURIGANA_MARKER,
    as_hiragana,
    continuative,
    geminate,
    rendaku_variants,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Resource Data Classes
# ============================================================================

@dataclass(frozen=True)
class Kanji:
    """Reading profile of a single kanji character."""
    char: str
    readings: Tuple[str, ...] = ()
    name_readings: Tuple[str, ...] = ()  # Only used for proper names

    @classmethod
    def of(cls, char: str, readings: Iterable[str],
           name_readings: Iterable[str] = ()) -> 'Kanji':
        """Build a profile from any iterables of readings."""
        return cls(char=char, readings=tuple(readings), name_readings=tuple(name_readings))

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True)
class SpecialExpression:
    """A multi-character text whose readings cannot be built per character."""
    text: str
    readings: Tuple[str, ...] = field(default=())

    @classmethod
    def of(cls, text: str, readings: Iterable[str]) -> 'SpecialExpression':
        return cls(text=text, readings=tuple(readings))

    def __str__(self) -> str:
        return self.text


# ============================================================================
# Reading Notation
# ============================================================================

def is_suffix_reading(reading: str) -> bool:
    """A reading with a leading '-' only appears after another character."""
    return reading.startswith(AFFIX_MARKER)


def is_prefix_reading(reading: str) -> bool:
    """A reading with a trailing '-' only appears before another character."""
    return reading.endswith(AFFIX_MARKER)


def expand_okurigana(reading: str) -> List[str]:
    """
    Expand a normalized 'stem.suffix' reading into its inflected forms.

    Yields the stem, the stem followed by every prefix of the suffix, and
    the continuative form when the suffix ends in a godan ending:

        はな.す -> はな, はなす, はなし
        あつ.まる -> あつ, あつま, あつまる, あつまり

    Args:
        reading: Reading without affix markers, in hiragana.

    Returns:
        List of readings, or an empty list for a malformed reading.
    """
    pieces = reading.split(OKURIGANA_MARKER)
    if len(pieces) == 1:
        return [reading]
    if len(pieces) != 2:
        logger.warning(f"Reading '{reading}' has more than one okurigana marker, skipping")
        return []

    stem, suffix = pieces
    expanded = [stem]
    for end in range(1, len(suffix) + 1):
        expanded.append(stem + suffix[:end])

    inflected = continuative(stem + suffix)
    if suffix and inflected != stem + suffix:
        expanded.append(inflected)
    return expanded


# ============================================================================
# Candidate Reading Generation
# ============================================================================

def potential_readings(kanji: Kanji, is_first_char: bool, is_last_char: bool,
                       used_in_name: bool) -> FrozenSet[str]:
    """
    Get every reading a kanji can take at a given position of a word.

    Applies, in order: affix filtering, katakana folding, okurigana
    expansion, rendaku (when the kanji is not the first character) and
    gemination (when it is not the last character).

    Args:
        kanji: Kanji reading profile.
        is_first_char: True if the kanji starts the word.
        is_last_char: True if the kanji ends the word.
        used_in_name: True to include the name-only readings.

    Returns:
        Set of hiragana readings. Empty readings are never included.

    Example:
        >>> sorted(potential_readings(Kanji.of('話', ['はな.す']), True, True, False))
        ['はな', 'はなし', 'はなす']
    """
    return _potential_readings(kanji, is_first_char, is_last_char, used_in_name)


@lru_cache(maxsize=65536)
def _potential_readings(kanji: Kanji, is_first_char: bool, is_last_char: bool,
                        used_in_name: bool) -> FrozenSet[str]:
    readings = list(kanji.readings)
    if used_in_name:
        readings.extend(kanji.name_readings)

    candidates: List[str] = []
    for reading in readings:
        if is_first_char and is_suffix_reading(reading):
            continue
        if is_last_char and is_prefix_reading(reading):
            continue
        normalized = as_hiragana(reading.replace(AFFIX_MARKER, ""))
        candidates.extend(expand_okurigana(normalized))

    result: Set[str] = set(candidates)

    if not is_first_char:
        for candidate in list(result):
            result.update(rendaku_variants(candidate))

    if not is_last_char:
        for candidate in list(result):
            result.add(geminate(candidate))

    result.discard("")
    return frozenset(result)


def clear_reading_cache():
    """Clear the memoized candidate readings."""
    _potential_readings.cache_clear()
