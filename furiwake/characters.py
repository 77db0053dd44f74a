"""
Character handling and kana conversion for furiwake.

Provides character classification (kana, kanji, repeaters), katakana to
hiragana folding, and the phonological tables used when expanding kanji
readings: rendaku (sequential voicing), gemination and the godan
continuative endings.
"""

import re
from typing import Dict, FrozenSet, Tuple

# ============================================================================
# Kana Ranges
# ============================================================================

# Hiragana block, excluding the unassigned 0x3097-0x3098 code points
HIRAGANA_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x3041, 0x3096),
    (0x3099, 0x309F),
)

# Katakana block (includes ー, ヶ and the iteration marks ヽヾ)
KATAKANA_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x30A0, 0x30FF),
)

# Katakana that have a hiragana counterpart exactly 0x60 code points lower:
# ァ (0x30A1) through ヶ (0x30F6), plus the iteration marks ヽヾ.
_KATAKANA_FOLDABLE = list(range(0x30A1, 0x30A1 + 86)) + [0x30FD, 0x30FE]

KATAKANA_TO_HIRAGANA: Dict[int, int] = {k: k - 0x60 for k in _KATAKANA_FOLDABLE}
HIRAGANA_TO_KATAKANA: Dict[int, int] = {h: k for k, h in KATAKANA_TO_HIRAGANA.items()}

# ============================================================================
# Kanji Ranges
# ============================================================================

KANJI_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x4E00, 0x9FFF),    # CJK Unified Ideographs
    (0x3400, 0x4DBF),    # Extension A
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2B73F),  # Extension C
    (0x2B740, 0x2B81F),  # Extension D
    (0x2B820, 0x2CEAF),  # Extension E
    (0x2CEB0, 0x2EBEF),  # Extension F
    (0x30000, 0x3134F),  # Extension G
    (0x31350, 0x323AF),  # Extension H
    (0x2EBF0, 0x2EE5F),  # Extension I
    (0x2E80, 0x2EFF),    # CJK Radicals Supplement
    (0x2F00, 0x2FDF),    # Kangxi Radicals
    (0xF900, 0xFAFF),    # CJK Compatibility Ideographs
    (0x2F800, 0x2FA1F),  # CJK Compatibility Ideographs Supplement
)

# Kanji repeaters: 々 and its variant 〻
REPEATER_CHARACTERS: FrozenSet[str] = frozenset("々〻")

# Reading notation markers (KANJIDIC style)
AFFIX_MARKER = "-"
OKURIGANA_MARKER = "."

# ============================================================================
# Phonological Tables
# ============================================================================

# Unvoiced -> voiced forms applied to the first kana of a non-initial reading.
# ち and つ voice to both their historical and their modern spellings; the
# h-row also takes the semi-voiced (handakuten) forms.
RENDAKU_FORMS: Dict[str, Tuple[str, ...]] = {
    "か": ("が",), "き": ("ぎ",), "く": ("ぐ",), "け": ("げ",), "こ": ("ご",),
    "さ": ("ざ",), "し": ("じ",), "す": ("ず",), "せ": ("ぜ",), "そ": ("ぞ",),
    "た": ("だ",), "ち": ("ぢ", "じ"), "つ": ("づ", "ず"), "て": ("で",), "と": ("ど",),
    "は": ("ば", "ぱ"), "ひ": ("び", "ぴ"), "ふ": ("ぶ", "ぷ"), "へ": ("べ", "ぺ"), "ほ": ("ぼ", "ぽ"),
}

# Final kana that may be replaced by the gemination marker in compounds
# (一 いち -> いっ in 一杯, 学 がく -> がっ in 学校).
GEMINATION_ENDINGS: FrozenSet[str] = frozenset("つくきち")

SOKUON = "っ"

# Godan dictionary-form ending -> continuative (masu-stem) ending
CONTINUATIVE_ENDINGS: Dict[str, str] = {
    "く": "き",
    "ぐ": "ぎ",
    "す": "し",
    "ず": "じ",
    "む": "み",
    "る": "り",
    "ぶ": "び",
    "う": "い",
}

# ============================================================================
# Regular Expressions
# ============================================================================

KANA_REGEX = r"[\u3041-\u3096\u3099-\u309F\u30A0-\u30FF]"
_KANA_PATTERN = re.compile(rf"^{KANA_REGEX}+$")


# ============================================================================
# Character Testing Functions
# ============================================================================

def _in_ranges(char: str, ranges: Tuple[Tuple[int, int], ...]) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in ranges)


def is_hiragana(char: str) -> bool:
    """Check if a single character is hiragana."""
    return _in_ranges(char, HIRAGANA_RANGES)


def is_katakana(char: str) -> bool:
    """Check if a single character is katakana."""
    return _in_ranges(char, KATAKANA_RANGES)


def is_kana(char: str) -> bool:
    """Check if a single character is kana (hiragana or katakana)."""
    return is_hiragana(char) or is_katakana(char)


def is_kanji(char: str) -> bool:
    """Check if a single character is a CJK ideograph."""
    return _in_ranges(char, KANJI_RANGES)


def is_repeater(char: str) -> bool:
    """Check if a character is a kanji repeater (々)."""
    return char in REPEATER_CHARACTERS


def is_all_kana(text: str) -> bool:
    """Check if text is non-empty and consists entirely of kana."""
    return bool(_KANA_PATTERN.match(text))


def is_single_unit(char: str) -> bool:
    """
    Check if a character fits in a single UTF-16 code unit.

    Readings are compared position by position against the written form,
    so characters outside the Basic Multilingual Plane are not allowed in
    them.
    """
    return ord(char) <= 0xFFFF


# ============================================================================
# Kana Conversion
# ============================================================================

def as_hiragana(text: str) -> str:
    """
    Convert katakana to hiragana.

    Characters without a hiragana counterpart (ー, kanji, latin) are kept
    as they are.

    Args:
        text: Text to convert.

    Returns:
        Text with katakana converted to hiragana.
    """
    return text.translate(KATAKANA_TO_HIRAGANA)


def as_katakana(text: str) -> str:
    """
    Convert hiragana to katakana.

    Args:
        text: Text to convert.

    Returns:
        Text with hiragana converted to katakana.
    """
    return text.translate(HIRAGANA_TO_KATAKANA)


def is_kana_equivalent(text: str, other: str) -> bool:
    """Check if two texts are equal once katakana is folded to hiragana."""
    return as_hiragana(text) == as_hiragana(other)


# ============================================================================
# Phonological Variants
# ============================================================================

def rendaku_variants(text: str) -> Tuple[str, ...]:
    """
    Return the voiced variants of a reading.

    Args:
        text: Reading in hiragana.

    Returns:
        One variant per voiced counterpart of the first character, or an
        empty tuple when the first character does not voice.
    """
    if not text:
        return ()
    return tuple(voiced + text[1:] for voiced in RENDAKU_FORMS.get(text[0], ()))


def geminate(text: str) -> str:
    """
    Apply gemination to the last character of a reading.

    Returns the text unchanged when its last character cannot geminate.
    """
    if text and text[-1] in GEMINATION_ENDINGS:
        return text[:-1] + SOKUON
    return text


def continuative(text: str) -> str:
    """
    Replace a godan dictionary-form ending with its continuative ending.

    はなす -> はなし, よむ -> よみ. Returns the text unchanged when it does
    not end in a godan ending.
    """
    if text and text[-1] in CONTINUATIVE_ENDINGS:
        return text[:-1] + CONTINUATIVE_ENDINGS[text[-1]]
    return text
