"""
Tests for kanji.py - reading notation and candidate reading generation.
"""

import logging

from furiwake.kanji import (
    Kanji,
    expand_okurigana,
    is_prefix_reading,
    is_suffix_reading,
    potential_readings,
)


class TestReadingNotation:
    """Tests for affix markers and okurigana expansion."""

    def test_affix_markers(self):
        assert is_suffix_reading('-び')
        assert not is_suffix_reading('お-')
        assert is_prefix_reading('お-')
        assert not is_prefix_reading('おお')

    def test_expand_without_okurigana(self):
        assert expand_okurigana('はなし') == ['はなし']

    def test_expand_okurigana(self):
        """Stem, stem with each prefix of the okurigana, and the continuative form."""
        assert expand_okurigana('はな.す') == ['はな', 'はなす', 'はなし']
        assert expand_okurigana('あつ.まる') == ['あつ', 'あつま', 'あつまる', 'あつまり']

    def test_expand_without_continuative(self):
        assert expand_okurigana('おお.きい') == ['おお', 'おおき', 'おおきい']

    def test_expand_malformed(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert expand_okurigana('あ.い.う') == []
        assert 'more than one okurigana marker' in caplog.text


class TestPotentialReadings:
    """Tests for position-dependent candidate readings."""

    def test_okurigana_and_katakana(self):
        kanji = Kanji.of('話', ['ワ', 'はな.す', 'はなし'])
        assert potential_readings(kanji, True, True, False) == {'わ', 'はな', 'はなす', 'はなし'}

    def test_suffix_reading_excluded_at_start(self):
        kanji = Kanji.of('人', ['ひと', '-り'])
        assert 'り' not in potential_readings(kanji, True, True, False)
        assert 'り' in potential_readings(kanji, False, True, False)

    def test_prefix_reading_excluded_at_end(self):
        kanji = Kanji.of('御', ['ゴ', 'お-'])
        assert 'お' not in potential_readings(kanji, True, True, False)
        assert 'お' in potential_readings(kanji, True, False, False)

    def test_rendaku_only_after_first(self):
        kanji = Kanji.of('棚', ['たな'])
        assert 'だな' not in potential_readings(kanji, True, True, False)
        assert 'だな' in potential_readings(kanji, False, True, False)

    def test_gemination_only_before_last(self):
        kanji = Kanji.of('学', ['ガク'])
        assert 'がっ' not in potential_readings(kanji, True, True, False)
        assert potential_readings(kanji, True, False, False) == {'がく', 'がっ'}

    def test_rendaku_then_gemination(self):
        kanji = Kanji.of('国', ['コク'])
        assert 'ごっ' in potential_readings(kanji, False, False, False)

    def test_name_readings(self):
        kanji = Kanji.of('和', ['ワ'], ['かず'])
        assert 'かず' not in potential_readings(kanji, True, False, False)
        assert 'かず' in potential_readings(kanji, True, False, True)

    def test_empty_readings_discarded(self):
        kanji = Kanji.of('〇', ['-', ''])
        assert potential_readings(kanji, False, False, False) == frozenset()
