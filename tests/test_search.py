"""
Tests for search.py - segment search over (kanji_pos, reading_pos) states.
"""

import pytest

from furiwake.cache import CandidateCache
from furiwake.entry import Entry
from furiwake.resources import ResourceSet
from furiwake.search import SearchBudgetExceeded, SegmentSearch
from furiwake.solution import Part


@pytest.fixture
def search(cache):
    return SegmentSearch(cache, max_steps=0)


class TestTransitions:
    """Tests for the moves out of a single state."""

    def test_kana_pass_through(self, search):
        entry = Entry('話す', 'はなす')
        assert search.transitions(entry, 1, 2) == [((2, 3), Part('す'))]

    def test_kana_pass_through_katakana(self, search):
        entry = Entry('話ス', 'はなす')
        assert search.transitions(entry, 1, 2) == [((2, 3), Part('ス'))]

    def test_kana_mismatch(self, search):
        entry = Entry('話す', 'はなし')
        assert search.transitions(entry, 1, 2) == []

    def test_candidates_must_prefix_reading(self, search):
        entry = Entry('話す', 'はなす')
        targets = {target for target, _ in search.transitions(entry, 0, 0)}
        assert targets == {(1, 2), (1, 3)}

    def test_annotation_keeps_reading_as_written(self, search):
        entry = Entry('話す', 'ハナス')
        transitions = search.transitions(entry, 0, 0)
        assert ((1, 2), Part('話', 'ハナ')) in transitions

    def test_exhausted(self, search):
        entry = Entry('話す', 'はなす')
        assert search.transitions(entry, 2, 3) == []
        assert search.transitions(entry, 1, 3) == []

    def test_max_window(self, search):
        assert search.max_window == 3  # 真っ青

    def test_max_window_without_expressions(self):
        search = SegmentSearch(CandidateCache(ResourceSet()))
        assert search.max_window == 1


class TestSearch:
    """Tests for full path enumeration."""

    def test_single_path(self, search):
        paths = search.search(Entry('話す', 'はなす'))
        assert paths == [(Part('話', 'はな'), Part('す'))]

    def test_expression_path(self, search):
        assert search.search(Entry('大人', 'おとな')) == [(Part('大人', 'おとな'),)]

    def test_no_path(self, search):
        assert search.search(Entry('話す', 'はなさない')) == []

    def test_all_paths_enumerated(self, search):
        paths = search.search(Entry('上手', 'じょうず'))
        assert len(paths) == 2
        assert set(paths) == {
            (Part('上', 'じょう'), Part('手', 'ず')),
            (Part('上', 'じょ'), Part('手', 'うず')),
        }

    def test_deterministic(self, search):
        entry = Entry('一ヶ月', 'いっかげつ')
        assert search.search(entry) == search.search(entry)

    def test_budget(self, cache):
        search = SegmentSearch(cache, max_steps=1)
        with pytest.raises(SearchBudgetExceeded):
            search.search(Entry('話す', 'はなす'))

    def test_budget_disabled(self, cache):
        search = SegmentSearch(cache, max_steps=0)
        assert len(search.search(Entry('話す', 'はなす'))) == 1

    def test_many_states(self):
        """Long words with several readings per character stay tractable."""
        resources = ResourceSet.from_mappings(kanji={'亜': ['ア', 'あ.あ']})
        search = SegmentSearch(CandidateCache(resources), max_steps=100000)
        entry = Entry('亜' * 12, 'あ' * 24)
        paths = search.search(entry)
        # each character reads あ or ああ: 24 characters over 12 kanji needs ああ everywhere
        assert paths == [tuple(Part('亜', 'ああ') for _ in range(12))]
