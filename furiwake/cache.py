"""
Candidate reading cache for furiwake.

Dispatches the reading lookup of a window (single character or special
expression) and memoizes the result. Results are pure functions of the
key, so one cache can be shared by every entry of a batch, and by several
threads.
"""

import logging
import threading
from typing import Dict, FrozenSet, Tuple

from furiwake.characters import as_hiragana, is_kana
from furiwake.entry import Entry, Window
from furiwake.kanji import clear_reading_cache, potential_readings
from furiwake.resources import ResourceSet

logger = logging.getLogger(__name__)

# (raw text, effective text, is_name, is_first, is_last)
CacheKey = Tuple[str, str, bool, bool, bool]

EMPTY: FrozenSet[str] = frozenset()


class CandidateCache:
    """
    Thread-safe read-through cache of candidate readings.

    Example:
        >>> cache = CandidateCache(resources)
        >>> cache.candidates_for(entry, Window(entry, 0, 1))
        frozenset({'はな', 'はなす', 'はなし'})
    """

    def __init__(self, resources: ResourceSet):
        self.resources = resources
        self._values: Dict[CacheKey, FrozenSet[str]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def candidates_for(self, entry: Entry, window: Window) -> FrozenSet[str]:
        """
        Get the candidate readings of a window, in hiragana.

        Args:
            entry: Entry the window belongs to.
            window: Window over the entry's characters.

        Returns:
            Set of readings (possibly empty).
        """
        key = (window.raw_text, window.text, entry.is_name, window.is_first, window.is_last)

        with self._lock:
            cached = self._values.get(key)
            if cached is not None:
                self.hits += 1
                return cached

        value = self._compute(entry, window)

        with self._lock:
            self.misses += 1
            self._values[key] = value
        return value

    def _compute(self, entry: Entry, window: Window) -> FrozenSet[str]:
        if window.length == 1:
            return self._character_candidates(entry, window)
        return self._expression_candidates(window)

    def _character_candidates(self, entry: Entry, window: Window) -> FrozenSet[str]:
        char = window.text
        kanji = self.resources.lookup_character(char, is_name=entry.is_name)
        if kanji is not None:
            return potential_readings(kanji, window.is_first, window.is_last, entry.is_name)
        if is_kana(char):
            # A kana reads as itself
            return frozenset((as_hiragana(char),))
        return EMPTY

    def _expression_candidates(self, window: Window) -> FrozenSet[str]:
        expression = self.resources.lookup_expression(window.raw_text)
        if expression is None and window.text != window.raw_text:
            expression = self.resources.lookup_expression(window.text)
        if expression is None:
            return EMPTY
        logger.debug(f"Special expression {expression.text}: {', '.join(expression.readings)}")
        return frozenset(as_hiragana(r) for r in expression.readings if r)

    def clear(self):
        """Drop every cached value, including the memoized kanji readings."""
        with self._lock:
            self._values.clear()
            self.hits = 0
            self.misses = 0
        clear_reading_cache()

    def __len__(self) -> int:
        return len(self._values)
