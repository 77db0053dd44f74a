"""
Solution validation.

Re-checks an indexed solution independently of how it was produced:

1. No overlap: each character is covered by at most one span.
2. Full coverage: each character not covered by a span is kana.
3. Round trip: reading the spans and the uncovered kana in order gives
   back the entry's reading (katakana folded to hiragana).

Spans may cover kana: 真っ青 / まっさお admits the single span 0-2:まっさお.
"""

from typing import List

from furiwake.characters import is_kana, is_kana_equivalent
from furiwake.solution import IndexedSolution


def validation_errors(solution: IndexedSolution) -> List[str]:
    """
    List the reasons an indexed solution is invalid.

    Args:
        solution: Solution to check.

    Returns:
        Human-readable error messages; empty when the solution is valid.
    """
    runes = solution.entry.runes
    spans = solution.sorted_parts()

    for span in spans:
        if span.end >= len(runes):
            return [f"Span {span} reaches past the end of '{solution.entry.written}'"]

    errors = []
    for index in range(len(runes)):
        covering = solution.parts_for_index(index)
        if len(covering) > 1:
            errors.append(f"Index {index} is covered by {len(covering)} spans")
    if errors:
        return errors

    reconstituted = []
    index = 0
    while index < len(runes):
        covering = solution.parts_for_index(index)
        if covering:
            reconstituted.append(covering[0].value)
            index = covering[0].end + 1
            continue
        char = runes[index]
        if not is_kana(char):
            errors.append(f"Index {index} ('{char}') is neither kana nor covered by a span")
        reconstituted.append(char)
        index += 1
    if errors:
        return errors

    text = ''.join(reconstituted)
    if not is_kana_equivalent(text, solution.entry.reading):
        errors.append(f"Reconstituted reading '{text}' does not match '{solution.entry.reading}'")
    return errors


def check_solution(solution: IndexedSolution) -> bool:
    """Check that an indexed solution is valid for its entry."""
    return not validation_errors(solution)
