"""
Tests for resources.py - building and querying a ResourceSet.
"""

import pytest

from furiwake.resources import ResourceSet
from furiwake.solver import Solver


class TestFromMappings:
    """Tests for the accepted name kanji value forms."""

    def test_name_readings_only(self):
        resources = ResourceSet.from_mappings(name_kanji={'和': ['かず']})
        kanji = resources.lookup_character('和', is_name=True)
        assert kanji.readings == ()
        assert kanji.name_readings == ('かず',)

    def test_tuple_form(self):
        resources = ResourceSet.from_mappings(name_kanji={'佐': (['サ'], ['すけ'])})
        kanji = resources.lookup_character('佐', is_name=True)
        assert kanji.readings == ('サ',)
        assert kanji.name_readings == ('すけ',)

    def test_list_form(self):
        """A JSON-style [readings, name_readings] pair is read like the tuple."""
        resources = ResourceSet.from_mappings(name_kanji={'佐': [['サ'], ['すけ']]})
        kanji = resources.lookup_character('佐', is_name=True)
        assert kanji.readings == ('サ',)
        assert kanji.name_readings == ('すけ',)
        assert hash(kanji) == hash(resources.lookup_character('佐', is_name=True))

    def test_list_form_solves(self):
        resources = ResourceSet.from_mappings(
            kanji={'子': ['シ', 'こ']},
            name_kanji={'佐': [['サ'], ['すけ']]},
        )
        solution = Solver(resources).solve_text('佐子', 'すけこ', is_name=True)
        assert solution.to_bracket_text() == '[佐|すけ][子|こ]'

    @pytest.mark.parametrize("value", [
        'すけ',
        [['サ'], ['すけ'], ['た']],
        [['サ'], 'すけ'],
        [1, 2],
        None,
    ])
    def test_malformed(self, value):
        with pytest.raises(ValueError, match='佐'):
            ResourceSet.from_mappings(name_kanji={'佐': value})


class TestLookups:
    """Tests for lookups against the shared resources."""

    def test_miss(self, resources):
        assert resources.lookup_character('犬') is None
        assert resources.lookup_expression('子供') is None

    def test_name_falls_back_to_general(self, resources):
        assert resources.lookup_character('子', is_name=True) == resources.lookup_character('子')
