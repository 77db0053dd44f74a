"""
Pydantic models for furiwake input files and JSON output.

Usage:
    from furiwake.models import FuriganaResult, ResourceFile

    result = FuriganaResult.from_text_solution(solver.solve(entry))
    print(result.model_dump_json())

    resources = ResourceFile.model_validate_json(path.read_text()).to_resource_set()
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from furiwake.entry import Entry
from furiwake.output import TextSolution
from furiwake.resources import ResourceSet


# =============================================================================
# Output
# =============================================================================

class FuriganaSegment(BaseModel):
    """A run of the written form with its furigana."""
    text: str = Field(..., description="Written text of the segment")
    furigana: Optional[str] = Field(None, description="Reading of the segment, None for kana")


class FuriganaResult(BaseModel):
    """
    Furigana for one word.

    `solved` is False when the word has no solution or several; `segments`
    is then empty.
    """
    written: str = Field(..., description="Written form as given")
    reading: str = Field(..., description="Reading as given")
    is_name: bool = Field(False, description="True if name readings were allowed")
    solved: bool = Field(False, description="True if exactly one solution was found")
    segments: List[FuriganaSegment] = Field(default_factory=list)
    text: Optional[str] = Field(None, description="Bracket text, e.g. '[大人|おとな]'")

    @classmethod
    def from_text_solution(cls, solution: TextSolution) -> "FuriganaResult":
        """Create a FuriganaResult from an accepted solution."""
        return cls(
            written=solution.entry.written,
            reading=solution.entry.reading,
            is_name=solution.entry.is_name,
            solved=True,
            segments=[FuriganaSegment(text=s.text, furigana=s.furigana) for s in solution.segments],
            text=solution.to_bracket_text(),
        )

    @classmethod
    def unsolved(cls, written: str, reading: str, is_name: bool = False) -> "FuriganaResult":
        return cls(written=written, reading=reading, is_name=is_name)

    @classmethod
    def for_entry(cls, entry: Entry, solution: Optional[TextSolution]) -> "FuriganaResult":
        if solution is None:
            return cls.unsolved(entry.written, entry.reading, entry.is_name)
        return cls.from_text_solution(solution)


# =============================================================================
# Resource Files
# =============================================================================

class NameKanjiEntry(BaseModel):
    """Readings of a kanji when used in a proper name."""
    readings: List[str] = Field(default_factory=list, description="General readings")
    name_readings: List[str] = Field(default_factory=list, description="Name-only readings")


class ResourceFile(BaseModel):
    """
    JSON resource file.

    Example:
        {
            "kanji": {"話": ["ワ", "はな.す", "はなし"]},
            "name_kanji": {"佐": {"readings": ["サ"], "name_readings": ["すけ"]}},
            "expressions": {"大人": ["おとな"]}
        }
    """
    kanji: Dict[str, List[str]] = Field(default_factory=dict, description="Kanji -> readings")
    name_kanji: Dict[str, NameKanjiEntry] = Field(default_factory=dict, description="Kanji -> name readings")
    expressions: Dict[str, List[str]] = Field(default_factory=dict, description="Expression -> readings")

    def to_resource_set(self) -> ResourceSet:
        return ResourceSet.from_mappings(
            kanji=self.kanji,
            expressions=self.expressions,
            name_kanji={
                char: (entry.readings, entry.name_readings)
                for char, entry in self.name_kanji.items()
            },
        )
