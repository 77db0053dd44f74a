"""
Lexical resources for furiwake.

A ResourceSet is the read-only lookup surface the solver works against:
kanji reading profiles (a general table and a name table) and special
expressions. It is built once, by the JSON or database loaders in
furiwake.loading or directly from mappings, and never mutated while
entries are being solved.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from furiwake.kanji import Kanji, SpecialExpression

# A name kanji given as a mapping value: (readings, name_readings)
NameReadings = Tuple[Sequence[str], Sequence[str]]


class ResourceSet:
    """
    Read-only dictionaries of kanji readings and special expressions.

    Lookups never raise: a miss returns None, which simply prunes the
    corresponding search branch.
    """

    def __init__(self, kanji: Iterable[Kanji] = (),
                 expressions: Iterable[SpecialExpression] = (),
                 name_kanji: Iterable[Kanji] = ()):
        self._kanji: Mapping[str, Kanji] = MappingProxyType({k.char: k for k in kanji})
        self._name_kanji: Mapping[str, Kanji] = MappingProxyType({k.char: k for k in name_kanji})
        self._expressions: Mapping[str, SpecialExpression] = MappingProxyType(
            {e.text: e for e in expressions}
        )
        self._max_expression_length = max((len(text) for text in self._expressions), default=0)

    @classmethod
    def from_mappings(
        cls,
        kanji: Optional[Mapping[str, Sequence[str]]] = None,
        expressions: Optional[Mapping[str, Sequence[str]]] = None,
        name_kanji: Optional[Mapping[str, Union[NameReadings, Sequence[str]]]] = None,
    ) -> 'ResourceSet':
        """
        Build a resource set from plain mappings.

        Args:
            kanji: Character -> readings.
            expressions: Expression text -> readings.
            name_kanji: Character -> (readings, name_readings), or
                character -> name_readings.
                Any two-item sequence of string sequences is read as
                (readings, name_readings).

        Returns:
            A new ResourceSet.

        Raises:
            ValueError: If a name kanji value is neither form.

        Example:
            >>> resources = ResourceSet.from_mappings(
            ...     kanji={'話': ['ワ', 'はな.す', 'はなし']},
            ...     expressions={'大人': ['おとな']},
            ... )
        """
        kanji_list = [Kanji.of(char, readings) for char, readings in (kanji or {}).items()]
        expression_list = [
            SpecialExpression.of(text, readings) for text, readings in (expressions or {}).items()
        ]
        name_list = []
        for char, value in (name_kanji or {}).items():
            readings, name_readings = _split_name_readings(char, value)
            name_list.append(Kanji.of(char, readings, name_readings))
        return cls(kanji=kanji_list, expressions=expression_list, name_kanji=name_list)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_character(self, char: str, is_name: bool = False) -> Optional[Kanji]:
        """
        Get the reading profile of a character.

        For names, the name table is consulted first and the general table
        is the fallback.
        """
        if is_name:
            kanji = self._name_kanji.get(char)
            if kanji is not None:
                return kanji
        return self._kanji.get(char)

    def lookup_expression(self, text: str) -> Optional[SpecialExpression]:
        """Get the special expression spelled exactly as text."""
        return self._expressions.get(text)

    @property
    def max_expression_length(self) -> int:
        """Length of the longest special expression (0 when there are none)."""
        return self._max_expression_length

    # ------------------------------------------------------------------
    # Iteration (used by the database store)
    # ------------------------------------------------------------------

    @property
    def kanji(self) -> Tuple[Kanji, ...]:
        return tuple(self._kanji.values())

    @property
    def name_kanji(self) -> Tuple[Kanji, ...]:
        return tuple(self._name_kanji.values())

    @property
    def expressions(self) -> Tuple[SpecialExpression, ...]:
        return tuple(self._expressions.values())

    def stats(self) -> Dict[str, int]:
        """Count the entries of each table."""
        return {
            'kanji': len(self._kanji),
            'name_kanji': len(self._name_kanji),
            'expressions': len(self._expressions),
        }

    def __repr__(self) -> str:
        counts = ', '.join(f"{name}={count}" for name, count in self.stats().items())
        return f"ResourceSet({counts})"


def _is_reading_list(value) -> bool:
    return (isinstance(value, Sequence) and not isinstance(value, str)
            and all(isinstance(item, str) for item in value))


def _split_name_readings(char: str, value) -> Tuple[Sequence[str], Sequence[str]]:
    """Split a name kanji mapping value into (readings, name_readings)."""
    if _is_reading_list(value):
        return (), value
    if (isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2
            and all(_is_reading_list(item) for item in value)):
        return value[0], value[1]
    raise ValueError(
        f"Name kanji '{char}' must map to a list of name readings or to "
        f"(readings, name_readings), got {value!r}"
    )
