"""
Output formatting for furiwake.

Turns an accepted solution into a TextSolution: the ordered
(text, furigana) segments over the written form as written, repeaters
included, with adjacent kana runs merged.

TextSolutions have a bracket text format, where each annotated segment
is written [text|furigana]:

    大人の人 / おとなのひと  ->  [大人|おとな]の[人|ひと]
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from furiwake.entry import Entry
from furiwake.solution import IndexedSolution, Part, Solution, SolutionBuilder

_BRACKET_PATTERN = re.compile(r"([^\[]*)\[(.+?)\|(.*?)\]([^\[]*)")


@dataclass(frozen=True)
class Segment:
    """A run of the written form and its furigana, if any."""
    text: str
    furigana: Optional[str] = None


@dataclass(frozen=True)
class TextSolution:
    """Renderable furigana for an entry."""
    entry: Entry
    segments: Tuple[Segment, ...]

    def written_text(self) -> str:
        return ''.join(s.text for s in self.segments)

    def reading_text(self) -> str:
        """
        Get the reading spelled as in the entry.

        Kana segments read one reading character per written character, so
        their reading is taken from the entry (ハナス for [話|ハナ]す).
        """
        pieces = []
        position = 0
        for segment in self.segments:
            if segment.furigana is not None:
                pieces.append(segment.furigana)
                position += len(segment.furigana)
            else:
                pieces.append(self.entry.reading[position:position + len(segment.text)])
                position += len(segment.text)
        return ''.join(pieces)

    def to_bracket_text(self) -> str:
        return ''.join(
            s.text if s.furigana is None else f"[{s.text}|{s.furigana}]"
            for s in self.segments
        )

    def __str__(self) -> str:
        return self.to_bracket_text()


def to_text_solution(solution: Union[IndexedSolution, Solution]) -> TextSolution:
    """
    Map a solution onto the written form as written.

    Args:
        solution: Indexed solution (spans over the expanded characters) or
            merged solution.

    Returns:
        TextSolution whose segment texts spell the written form.
    """
    if isinstance(solution, Solution):
        segments = tuple(Segment(p.text, p.reading) for p in solution.parts)
        return TextSolution(solution.entry, segments)

    entry = solution.entry
    runes = entry.raw_runes
    starts = {f.start: f for f in solution.parts}
    segments: List[Segment] = []
    kana_start: Optional[int] = None

    index = 0
    while index < len(runes):
        furigana = starts.get(index)
        if furigana is None:
            if kana_start is None:
                kana_start = index
            index += 1
            continue
        if kana_start is not None:
            segments.append(Segment(''.join(runes[kana_start:index])))
            kana_start = None
        segments.append(Segment(''.join(runes[index:furigana.end + 1]), furigana.value))
        index = furigana.end + 1

    if kana_start is not None:
        segments.append(Segment(''.join(runes[kana_start:])))
    return TextSolution(entry, tuple(segments))


def parse_bracket_text(text: str, entry: Entry) -> Solution:
    """
    Parse a solution from the bracket text format.

    Args:
        text: Text such as '[大人|おとな]の[人|ひと]'.
        entry: Entry the text annotates.

    Returns:
        The merged solution.

    Raises:
        ValueError: If the text does not spell and read as the entry.
    """
    builder = SolutionBuilder()
    matches = list(_BRACKET_PATTERN.finditer(text))
    if not matches:
        builder.add(Part(text))
    for match in matches:
        before, base, furigana, after = match.groups()
        builder.add(Part(before))
        builder.add(Part(base, furigana))
        builder.add(Part(after))

    solution = builder.to_solution(entry)
    if solution is None:
        raise ValueError(f"Malformed solution text '{text}' for {entry}")
    return solution
