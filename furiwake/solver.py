"""
Furigana solver.

Runs the segment search for an entry, validates every decomposition it
finds and accepts an annotation only when exactly one distinct solution
survives. Zero solutions (unsolved) and several (ambiguous) both give
None: no annotation is better than a guess.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from furiwake import settings
from furiwake.cache import CandidateCache
from furiwake.characters import as_hiragana, is_kana, is_kanji
from furiwake.entry import Entry, EntryKind, InvalidEntryError
from furiwake.output import TextSolution, to_text_solution
from furiwake.resources import ResourceSet
from furiwake.search import SearchBudgetExceeded, SegmentSearch
from furiwake.solution import IndexedFurigana, IndexedSolution, SolutionBuilder
from furiwake.validation import validation_errors

logger = logging.getLogger(__name__)


class Solver:
    """
    Furigana solver bound to a resource set.

    Args:
        resources: Kanji readings and special expressions.
        cache: Candidate cache to use; a new one is created if omitted.
            Pass the same cache to several solvers to share it.
        max_steps: Search budget per entry (see SegmentSearch).
        single_kanji_fallback: Solve words with a single non-kana
            character, or a kanji written twice, by elimination when the
            dictionary has no matching reading. Defaults to
            settings.SINGLE_KANJI_FALLBACK.

    Example:
        >>> solver = Solver(ResourceSet.from_mappings(expressions={'大人': ['おとな']}))
        >>> solver.solve_text('大人', 'おとな').to_bracket_text()
        '[大人|おとな]'
    """

    def __init__(self, resources: ResourceSet, cache: Optional[CandidateCache] = None,
                 max_steps: Optional[int] = None,
                 single_kanji_fallback: Optional[bool] = None):
        self.resources = resources
        self.cache = cache if cache is not None else CandidateCache(resources)
        self.search = SegmentSearch(self.cache, max_steps=max_steps)
        if single_kanji_fallback is None:
            single_kanji_fallback = settings.SINGLE_KANJI_FALLBACK
        self.single_kanji_fallback = single_kanji_fallback

    def solutions(self, entry: Entry) -> Set[IndexedSolution]:
        """
        Get every distinct valid solution of an entry.

        Raises:
            SearchBudgetExceeded: If the search runs over its budget.
        """
        found: Set[IndexedSolution] = set()
        for parts in self.search.search(entry):
            indexed = SolutionBuilder(parts).to_indexed(entry)
            if indexed is None:
                logger.warning(f"Search produced parts that do not rebuild {entry}: {parts}")
                continue
            self._add_validated(found, indexed)

        if not found and self.single_kanji_fallback:
            for fallback in (solve_single_kanji, solve_repeated_kanji):
                indexed = fallback(entry)
                if indexed is not None:
                    logger.debug(f"Solved {entry} with {fallback.__name__}")
                    self._add_validated(found, indexed)
        return found

    @staticmethod
    def _add_validated(found: Set[IndexedSolution], indexed: IndexedSolution):
        errors = validation_errors(indexed)
        if errors:
            logger.warning(f"Rejected solution {indexed}: {'; '.join(errors)}")
            return
        found.add(indexed)

    def solve(self, entry: Entry) -> Optional[TextSolution]:
        """
        Annotate an entry.

        Returns:
            The TextSolution if exactly one solution exists, None otherwise.
        """
        try:
            found = self.solutions(entry)
        except SearchBudgetExceeded as e:
            logger.warning(str(e))
            return None

        if len(found) != 1:
            if found:
                logger.info(f"{entry} is ambiguous: {len(found)} solutions")
            else:
                logger.debug(f"{entry} is unsolved")
            return None
        return to_text_solution(next(iter(found)))

    def solve_text(self, written: str, reading: str, is_name: bool = False) -> Optional[TextSolution]:
        """
        Annotate a (written form, reading) pair.

        Raises:
            InvalidEntryError: If the pair cannot be an entry.
        """
        kind = EntryKind.NAME if is_name else EntryKind.VOCAB
        return self.solve(Entry(written, reading, kind))

    def solve_many(
        self, items: Iterable[Tuple[str, str, bool]]
    ) -> Iterator[Tuple[Tuple[str, str, bool], Optional[TextSolution]]]:
        """
        Annotate a batch of (written, reading, is_name) triples lazily.

        Invalid pairs are logged and give None instead of raising.
        """
        for item in items:
            written, reading, is_name = item
            try:
                result = self.solve_text(written, reading, is_name)
            except InvalidEntryError as e:
                logger.info(f"Skipping {reading}【{written}】: {e}")
                result = None
            yield item, result


# ============================================================================
# Fallback Solvers
# ============================================================================

def solve_single_kanji(entry: Entry) -> Optional[IndexedSolution]:
    """
    Solve an entry with exactly one non-kana character by elimination.

    The kana before and after the character must match the start and the
    end of the reading; what is left of the reading is the character's
    furigana.

    Args:
        entry: Entry to solve.

    Returns:
        The indexed solution, or None if the entry is not eligible or the
        surrounding kana do not match.
    """
    positions: List[int] = [i for i, c in enumerate(entry.runes) if not is_kana(c)]
    if len(positions) != 1:
        return None
    index = positions[0]

    before = as_hiragana(''.join(entry.runes[:index]))
    after = as_hiragana(''.join(entry.runes[index + 1:]))
    reading = entry.normalized_reading
    if not reading.startswith(before) or not reading.endswith(after):
        return None
    if len(before) + len(after) >= len(reading):
        return None

    furigana = entry.reading[len(before):len(reading) - len(after)]
    if not furigana.strip():
        return None
    return IndexedSolution.of(entry, IndexedFurigana.at(furigana, index))


def solve_repeated_kanji(entry: Entry) -> Optional[IndexedSolution]:
    """
    Solve an entry whose only non-kana characters are a kanji written twice.

    The kana around the pair are stripped from the reading as in
    solve_single_kanji, and the rest is split in half between the two
    characters: 日日 / ひび -> [日|ひ][日|び], 捗々しい / はかばかしい ->
    [捗|はか][々|ばか]しい.

    Args:
        entry: Entry to solve.

    Returns:
        The indexed solution, or None if the entry is not eligible or the
        remaining reading has an odd length.
    """
    positions: List[int] = [i for i, c in enumerate(entry.runes) if not is_kana(c)]
    if len(positions) != 2 or positions[1] != positions[0] + 1:
        return None
    index = positions[0]
    char = entry.runes[index]
    if not is_kanji(char) or entry.runes[index + 1] != char:
        return None

    before = as_hiragana(''.join(entry.runes[:index]))
    after = as_hiragana(''.join(entry.runes[index + 2:]))
    reading = entry.normalized_reading
    if not reading.startswith(before) or not reading.endswith(after):
        return None

    furigana = entry.reading[len(before):len(reading) - len(after)]
    if not furigana or len(furigana) % 2 != 0:
        return None
    half = len(furigana) // 2
    first, second = furigana[:half], furigana[half:]
    if not first.strip() or not second.strip():
        return None
    return IndexedSolution.of(
        entry,
        IndexedFurigana.at(first, index),
        IndexedFurigana.at(second, index + 1),
    )
