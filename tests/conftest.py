"""
Shared fixtures for furiwake tests.

The resource set is a small hand-picked dictionary in KANJIDIC notation,
enough to exercise expressions, okurigana, rendaku, gemination, repeaters
and name readings.
"""

import pytest

from furiwake.cache import CandidateCache
from furiwake.resources import ResourceSet
from furiwake.solver import Solver


KANJI = {
    '大': ['ダイ', 'タイ', 'おお-', 'おお.きい', 'おお.いに'],
    '人': ['ジン', 'ニン', 'ひと', '-り', '-と'],
    '話': ['ワ', 'はな.す', 'はなし'],
    '真': ['シン', 'ま', 'ま-', 'まこと'],
    '青': ['セイ', 'ショウ', 'あお', 'あお-', 'あお.い'],
    '御': ['ギョ', 'ゴ', 'おん-', 'お-', 'み-'],
    '姉': ['シ', 'あね', 'はは', 'ねえ'],
    '頑': ['ガン', 'かたく'],
    '張': ['チョウ', 'は.る', '-は.り', '-ば.り'],
    '一': ['イチ', 'イツ', 'ひと-', 'ひと.つ'],
    'ヶ': ['か', 'が', 'こ'],
    '月': ['ゲツ', 'ガツ', 'つき'],
    '時': ['ジ', 'とき'],
    '本': ['ホン', 'もと'],
    '棚': ['ホウ', 'たな'],
    '学': ['ガク', 'まな.ぶ'],
    '校': ['コウ', 'キョウ'],
    '上': ['ジョウ', 'ジョ'],
    '手': ['ず', 'うず'],
    '買': ['バイ', 'か.う'],
    '和': ['ワ', 'オ', 'やわ.らぐ', 'なご.む'],
    '子': ['シ', 'ス', 'こ', '-こ'],
    '杯': ['ハイ', 'さかずき', '-はい'],
}

EXPRESSIONS = {
    '大人': ['おとな'],
    '真っ青': ['まっさお'],
}

NAME_KANJI = {
    '和': ['かず'],
}


@pytest.fixture(scope="session")
def resources():
    """Resource set shared by the solver tests."""
    return ResourceSet.from_mappings(kanji=KANJI, expressions=EXPRESSIONS, name_kanji=NAME_KANJI)


@pytest.fixture
def cache(resources):
    """Fresh candidate cache."""
    return CandidateCache(resources)


@pytest.fixture
def solver(resources):
    """Solver without the single kanji fallback."""
    return Solver(resources, single_kanji_fallback=False)


@pytest.fixture
def resource_json(tmp_path):
    """The shared resources written as a JSON resource file."""
    import json

    path = tmp_path / "resources.json"
    data = {
        'kanji': KANJI,
        'name_kanji': {char: {'name_readings': readings} for char, readings in NAME_KANJI.items()},
        'expressions': EXPRESSIONS,
    }
    path.write_text(json.dumps(data, ensure_ascii=False), encoding='utf-8')
    return path


@pytest.fixture
def db_session(tmp_path):
    """Session on an empty resource database in a temporary directory."""
    from furiwake.db.connection import dispose_engines, get_session, init_db

    db_path = tmp_path / "furiwake.db"
    init_db(db_path)
    session = get_session(db_path)
    yield session
    session.close()
    dispose_engines(db_path)
