"""
Entries to solve.

An Entry is one (written form, reading) pair, validated and normalized:
the reading is folded to hiragana for comparisons, and kanji repeaters in
the written form are expanded to the characters they stand for.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from furiwake.characters import as_hiragana, is_all_kana, is_repeater, is_single_unit


class InvalidEntryError(ValueError):
    """Raised when a (written form, reading) pair cannot be solved at all."""


class EntryKind(Enum):
    """What kind of dictionary entry a word comes from."""
    VOCAB = 'vocab'
    NAME = 'name'  # Proper names may use name-only kanji readings


def expand_repeaters(runes: Tuple[str, ...]) -> Tuple[str, ...]:
    """
    Replace kanji repeaters with the characters they repeat.

    A single repeater copies the preceding character (時々 -> 時時); a
    doubled repeater copies the two preceding characters
    (一杯々々 -> 一杯一杯). A repeater with nothing before it is kept.

    Args:
        runes: Characters of the written form.

    Returns:
        Characters with repeaters resolved, same length as the input.
    """
    expanded: List[str] = list(runes)
    i = 0
    while i < len(runes):
        if i > 1 and is_repeater(runes[i]) and i + 1 < len(runes) and is_repeater(runes[i + 1]):
            expanded[i] = expanded[i - 2]
            expanded[i + 1] = expanded[i - 1]
            i += 2
            continue
        if i > 0 and is_repeater(runes[i]):
            expanded[i] = expanded[i - 1]
        i += 1
    return tuple(expanded)


@dataclass(frozen=True)
class Entry:
    """
    A word to annotate.

    Attributes:
        written: Written form, e.g. '大人しい'.
        reading: Pronunciation, e.g. 'おとなしい' (hiragana or katakana).
        kind: Vocabulary word or proper name.
        normalized_reading: Reading folded to hiragana.
        raw_runes: Characters of the written form as written.
        runes: Characters of the written form with repeaters expanded.
    """
    written: str
    reading: str
    kind: EntryKind = EntryKind.VOCAB
    normalized_reading: str = field(init=False, repr=False, compare=False)
    raw_runes: Tuple[str, ...] = field(init=False, repr=False, compare=False)
    runes: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.written or not self.written.strip():
            raise InvalidEntryError("Written form must not be empty")
        if not self.reading or not self.reading.strip():
            raise InvalidEntryError("Reading must not be empty")
        if is_all_kana(self.written):
            raise InvalidEntryError(
                f"Written form '{self.written}' must contain at least one non-kana character to solve"
            )
        if not all(is_single_unit(c) for c in self.reading):
            raise InvalidEntryError(
                f"Reading '{self.reading}' must not contain characters outside the Basic Multilingual Plane"
            )

        raw_runes = tuple(self.written)
        object.__setattr__(self, 'normalized_reading', as_hiragana(self.reading))
        object.__setattr__(self, 'raw_runes', raw_runes)
        object.__setattr__(self, 'runes', expand_repeaters(raw_runes))

    @classmethod
    def vocab(cls, written: str, reading: str) -> 'Entry':
        return cls(written, reading, EntryKind.VOCAB)

    @classmethod
    def name(cls, written: str, reading: str) -> 'Entry':
        return cls(written, reading, EntryKind.NAME)

    @property
    def is_name(self) -> bool:
        return self.kind is EntryKind.NAME

    def __len__(self) -> int:
        return len(self.runes)

    def __str__(self) -> str:
        return f"{self.reading}【{self.written}】"


@dataclass(frozen=True)
class Window:
    """A (start, length) view over an entry's characters."""
    entry: Entry
    start: int
    length: int

    @property
    def end(self) -> int:
        """Index one past the last character of the window."""
        return self.start + self.length

    @property
    def is_first(self) -> bool:
        return self.start == 0

    @property
    def is_last(self) -> bool:
        return self.end == len(self.entry.runes)

    @property
    def text(self) -> str:
        """Window text with repeaters expanded."""
        return ''.join(self.entry.runes[self.start:self.end])

    @property
    def raw_text(self) -> str:
        """Window text as written."""
        return ''.join(self.entry.raw_runes[self.start:self.end])
