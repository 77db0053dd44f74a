"""
Solution representations for furiwake.

A completed search path is a list of Parts. The SolutionBuilder checks
that the parts reproduce the entry and converts them into:

- a Solution: parts with consecutive kana runs merged, ready to render;
- an IndexedSolution: the set of annotated spans over the entry's
  characters, the compact form used for validation and de-duplication.

Indexed solutions have a text format, one 'start[-end]:reading' item per
span separated by ';', with inclusive character indices:

    大人買い / おとながい  ->  0-1:おとな;2:が
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from furiwake.characters import as_hiragana, is_kanji
from furiwake.entry import Entry

SPAN_SEPARATOR = ';'
READING_SEPARATOR = ':'
RANGE_SEPARATOR = '-'


# ============================================================================
# Parts
# ============================================================================

@dataclass(frozen=True)
class Part:
    """A piece of the written form, with its reading if annotated."""
    text: str
    reading: Optional[str] = None

    @property
    def is_literal(self) -> bool:
        return self.reading is None

    def pronunciation(self) -> str:
        return self.text if self.reading is None else self.reading


@dataclass(frozen=True)
class IndexedFurigana:
    """A reading covering the characters start..end (inclusive)."""
    value: str
    start: int
    end: int

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Furigana must not be empty or whitespace")
        if self.start < 0:
            raise ValueError("Starting position must be non-negative")
        if self.end < self.start:
            raise ValueError("End position must be greater than or equal to the start position")

    @classmethod
    def at(cls, value: str, index: int) -> 'IndexedFurigana':
        """A reading covering a single character."""
        return cls(value, index, index)

    def covers(self, index: int) -> bool:
        return self.start <= index <= self.end

    def __str__(self) -> str:
        if self.start == self.end:
            return f"{self.start}{READING_SEPARATOR}{self.value}"
        return f"{self.start}{RANGE_SEPARATOR}{self.end}{READING_SEPARATOR}{self.value}"


# ============================================================================
# Solutions
# ============================================================================

@dataclass(frozen=True)
class IndexedSolution:
    """
    An entry with a set of furigana spans.

    Two indexed solutions are equal when they are for the same entry and
    have the same spans, in any order.
    """
    entry: Entry
    parts: FrozenSet[IndexedFurigana]

    @classmethod
    def of(cls, entry: Entry, *parts: IndexedFurigana) -> 'IndexedSolution':
        return cls(entry, frozenset(parts))

    def sorted_parts(self) -> List[IndexedFurigana]:
        return sorted(self.parts, key=lambda f: (f.start, f.end, f.value))

    def parts_for_index(self, index: int) -> List[IndexedFurigana]:
        """
        Get the parts covering an index.

        An invalid solution may have several parts covering the same index.
        """
        return [f for f in self.sorted_parts() if f.covers(index)]

    def check(self) -> bool:
        """Check that the spans cover the entry without overlap and reproduce its reading."""
        from furiwake.validation import check_solution
        return check_solution(self)

    def to_text_solution(self):
        from furiwake.output import to_text_solution
        return to_text_solution(self)

    def to_index_text(self) -> str:
        return SPAN_SEPARATOR.join(str(f) for f in self.sorted_parts())

    def __str__(self) -> str:
        return f"{self.entry.written}|{self.entry.reading}|{self.to_index_text()}"


@dataclass(frozen=True)
class Solution:
    """An entry with its ordered parts, consecutive kana runs merged."""
    entry: Entry
    parts: Tuple[Part, ...]

    def to_indexed(self) -> IndexedSolution:
        """Convert to spans over the entry's characters."""
        spans = []
        position = 0
        for part in self.parts:
            if part.reading is not None:
                spans.append(IndexedFurigana(part.reading, position, position + len(part.text) - 1))
            position += len(part.text)
        return IndexedSolution(self.entry, frozenset(spans))


# ============================================================================
# Solution Builder
# ============================================================================

class SolutionBuilder:
    """
    Accumulates the parts of one search path.

    Parts with empty text are dropped. A builder is valid for an entry when
    its parts spell the written form, read as the entry's reading (kana
    folded) and every part containing a kanji carries a reading.
    """

    def __init__(self, parts: Iterable[Part] = ()):
        self._parts: List[Part] = [p for p in parts if p.text]

    def add(self, part: Part):
        if part.text:
            self._parts.append(part)

    @property
    def parts(self) -> Tuple[Part, ...]:
        return tuple(self._parts)

    def written_text(self) -> str:
        return ''.join(p.text for p in self._parts)

    def reading_text(self) -> str:
        return ''.join(p.pronunciation() for p in self._parts)

    def normalized_reading_text(self) -> str:
        return as_hiragana(self.reading_text())

    def is_valid(self, entry: Entry) -> bool:
        return (
            self.normalized_reading_text() == entry.normalized_reading
            and self.written_text() == entry.written
            and all(
                p.reading is not None and p.reading.strip()
                for p in self._parts
                if any(is_kanji(c) for c in p.text)
            )
        )

    def merged_parts(self) -> Tuple[Part, ...]:
        """Merge consecutive parts without a reading."""
        merged: List[Part] = []
        pending: List[str] = []
        for part in self._parts:
            if part.reading is None:
                pending.append(part.text)
                continue
            if pending:
                merged.append(Part(''.join(pending)))
                pending = []
            merged.append(part)
        if pending:
            merged.append(Part(''.join(pending)))
        return tuple(merged)

    def to_solution(self, entry: Entry) -> Optional[Solution]:
        """Get the merged solution, or None if the parts are not valid for the entry."""
        if not self.is_valid(entry):
            return None
        return Solution(entry, self.merged_parts())

    def to_indexed(self, entry: Entry) -> Optional[IndexedSolution]:
        """Get the indexed solution, or None if the parts are not valid for the entry."""
        solution = self.to_solution(entry)
        return solution.to_indexed() if solution is not None else None


# ============================================================================
# Text Format
# ============================================================================

def parse_index_text(text: str, entry: Entry) -> IndexedSolution:
    """
    Parse an indexed solution from its text format.

    Args:
        text: Spans such as '0-1:おとな;2:が'.
        entry: Entry the spans refer to.

    Returns:
        The indexed solution (not validated; call check() for that).

    Raises:
        ValueError: If a span is malformed.
    """
    spans = []
    for item in filter(None, text.split(SPAN_SEPARATOR)):
        indexes, separator, value = item.partition(READING_SEPARATOR)
        if not separator:
            raise ValueError(f"Span '{item}' has no reading")
        bounds = indexes.split(RANGE_SEPARATOR)
        if len(bounds) > 2:
            raise ValueError(f"Span '{item}' has a malformed range")
        try:
            start = int(bounds[0])
            end = int(bounds[-1])
        except ValueError:
            raise ValueError(f"Span '{item}' has a non-numeric range") from None
        spans.append(IndexedFurigana(value, start, end))
    return IndexedSolution(entry, frozenset(spans))
