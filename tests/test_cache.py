"""
Tests for cache.py - candidate reading lookup and memoization.
"""

from concurrent.futures import ThreadPoolExecutor

from furiwake.cache import CandidateCache
from furiwake.entry import Entry, Window
from furiwake.kanji import _potential_readings
from furiwake.resources import ResourceSet


class TestCandidates:
    """Tests for the readings returned per window."""

    def test_kanji(self, cache):
        entry = Entry('話す', 'はなす')
        assert cache.candidates_for(entry, Window(entry, 0, 1)) == {'わ', 'はな', 'はなす', 'はなし'}

    def test_kana_reads_as_itself(self, cache):
        entry = Entry('話ス', 'はなす')
        assert cache.candidates_for(entry, Window(entry, 1, 1)) == {'す'}

    def test_unknown_character(self, cache):
        entry = Entry('犬', 'いぬ')
        assert cache.candidates_for(entry, Window(entry, 0, 1)) == frozenset()

    def test_expression(self, cache):
        entry = Entry('大人', 'おとな')
        assert cache.candidates_for(entry, Window(entry, 0, 2)) == {'おとな'}

    def test_unknown_expression(self, cache):
        entry = Entry('大人買い', 'おとながい')
        assert cache.candidates_for(entry, Window(entry, 1, 2)) == frozenset()

    def test_expression_with_repeater(self):
        """Expressions are matched as written first, then with repeaters expanded."""
        resources = ResourceSet.from_mappings(expressions={'人人': ['ひとびと']})
        cache = CandidateCache(resources)
        entry = Entry('人々', 'ひとびと')
        assert cache.candidates_for(entry, Window(entry, 0, 2)) == {'ひとびと'}

    def test_expression_readings_folded(self):
        resources = ResourceSet.from_mappings(expressions={'煙草': ['タバコ', '']})
        cache = CandidateCache(resources)
        entry = Entry('煙草', 'たばこ')
        assert cache.candidates_for(entry, Window(entry, 0, 2)) == {'たばこ'}

    def test_name_table_first(self, cache):
        vocab = Entry('和子', 'かずこ')
        name = Entry.name('和子', 'かずこ')
        assert 'かず' not in cache.candidates_for(vocab, Window(vocab, 0, 1))
        assert cache.candidates_for(name, Window(name, 0, 1)) == {'かず'}


class TestMemoization:
    """Tests for cache hits and sharing."""

    def test_hits_and_misses(self, cache):
        entry = Entry('話す', 'はなす')
        window = Window(entry, 0, 1)
        first = cache.candidates_for(entry, window)
        second = cache.candidates_for(entry, window)
        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1
        assert len(cache) == 1

    def test_shared_across_entries(self, cache):
        """Same character at the same position hits the cache for another entry."""
        first = Entry('話す', 'はなす')
        second = Entry('話し', 'はなし')
        cache.candidates_for(first, Window(first, 0, 1))
        cache.candidates_for(second, Window(second, 0, 1))
        assert cache.hits == 1

    def test_position_is_part_of_key(self, cache):
        entry = Entry('時々', 'ときどき')
        cache.candidates_for(entry, Window(entry, 0, 1))
        cache.candidates_for(entry, Window(entry, 1, 1))
        assert cache.misses == 2

    def test_clear(self, cache):
        entry = Entry('話す', 'はなす')
        cache.candidates_for(entry, Window(entry, 0, 1))
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0

    def test_clear_drops_kanji_readings(self, cache):
        entry = Entry('話す', 'はなす')
        cache.candidates_for(entry, Window(entry, 0, 1))
        assert _potential_readings.cache_info().currsize > 0
        cache.clear()
        assert _potential_readings.cache_info().currsize == 0

    def test_threads(self, cache):
        entry = Entry('話す', 'はなす')
        window = Window(entry, 0, 1)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: cache.candidates_for(entry, window), range(32)))
        assert all(r == results[0] for r in results)
        assert cache.hits + cache.misses == 32
