"""Unit tests for the wilayah search engine and the country list loader."""

import json

import pytest

from careerconnect.core import regions
from careerconnect.core.errors import ServiceUnavailableError
from careerconnect.core.regions import Wilayah, WilayahSearchEngine, fuzzy_match, load_countries, load_wilayah

ITEMS = [
    Wilayah("32", "JAWA BARAT", "provinsi"),
    Wilayah("32.75", "KOTA BEKASI", "kabupaten"),
    Wilayah("32.75.01", "BEKASI BARAT", "kecamatan"),
    Wilayah("32.75.01.1001", "JAKASAMPURNA", "desa"),
    Wilayah("31", "DKI JAKARTA", "provinsi"),
]


@pytest.fixture
def engine():
    return WilayahSearchEngine(ITEMS)


@pytest.fixture(autouse=True)
def _fresh_cache():
    regions.clear_cache()
    yield
    regions.clear_cache()


@pytest.mark.parametrize(
    "text,query,expected",
    [
        ("Jakasampurna", "jksp", True),
        ("Jakasampurna", "JAKA", True),
        ("Jakasampurna", "pj", False),
        ("Bekasi", "", True),
    ],
)
def test_fuzzy_match(text, query, expected):
    assert fuzzy_match(text, query) is expected


class TestSearch:
    def test_prefix_beats_substring(self, engine):
        results = engine.search("bekasi")
        assert [(r["nama"], r["score"]) for r in results] == [("BEKASI BARAT", 100), ("KOTA BEKASI", 55)]

    def test_exact_name(self, engine):
        [result] = engine.search("jawa barat")
        assert result == {"kode": "32", "nama": "JAWA BARAT", "tipe": "provinsi", "score": 210}

    def test_code_match_weighted_by_type(self, engine):
        results = engine.search("32.75")
        assert [(r["nama"], r["score"]) for r in results] == [
            ("KOTA BEKASI", 55),
            ("BEKASI BARAT", 50),
            ("JAKASAMPURNA", 45),
        ]

    def test_subsequence_match(self, engine):
        assert [(r["nama"], r["score"]) for r in engine.search("jksp")] == [("JAKASAMPURNA", 15)]

    def test_limit(self, engine):
        assert [r["nama"] for r in engine.search("ja", limit=2)] == ["JAWA BARAT", "JAKASAMPURNA"]
        assert len(engine.search("ja")) == 3

    def test_empty_query_returns_first_items(self, engine):
        assert [r["nama"] for r in engine.search("", limit=2)] == ["JAWA BARAT", "KOTA BEKASI"]


class TestLoaders:
    def test_wilayah_loaded_once_per_path(self, tmp_path):
        path = tmp_path / "wilayah.json"
        path.write_text(json.dumps([{"kode": "31", "nama": "DKI JAKARTA", "tipe": "provinsi"}]), encoding="utf-8")
        first = load_wilayah(path)
        path.write_text("[]", encoding="utf-8")
        assert load_wilayah(path) is first
        assert first.items == [Wilayah("31", "DKI JAKARTA", "provinsi")]

    def test_countries_mapping(self, tmp_path):
        path = tmp_path / "countries.json"
        path.write_text(
            json.dumps(
                [
                    {"alpha2Code": "ID", "name": "Indonesia", "callingCodes": ["62"], "flags": {"png": "id.png"}},
                    {"alpha2Code": "AQ", "name": "Antarctica"},
                ]
            ),
            encoding="utf-8",
        )
        assert load_countries(path) == [
            {"code": "ID", "name": "Indonesia", "dial": "62", "flagUrl": "id.png"},
            {"code": "AQ", "name": "Antarctica", "dial": "", "flagUrl": ""},
        ]

    @pytest.mark.parametrize("content", [None, "{not json", json.dumps(["JAWA BARAT"])])
    def test_unusable_wilayah_file(self, tmp_path, content):
        path = tmp_path / "wilayah.json"
        if content is not None:
            path.write_text(content, encoding="utf-8")
        with pytest.raises(ServiceUnavailableError) as exc_info:
            load_wilayah(path)
        assert exc_info.value.status_code == 503
