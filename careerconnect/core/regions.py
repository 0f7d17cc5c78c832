"""
Region lookups backed by static JSON files.

``wilayah.json`` lists Indonesian administrative regions as
``{"kode", "nama", "tipe"}`` items. ``countries.json`` follows the
restcountries layout (``alpha2Code``, ``name``, ``callingCodes``, ``flags``).
Both files are read once per path and kept in memory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from careerconnect.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

# Province > regency > district > village
TYPE_WEIGHTS: Dict[str, int] = {"provinsi": 20, "kabupaten": 15, "kecamatan": 10, "desa": 5}


@dataclass(frozen=True)
class Wilayah:
    kode: str
    nama: str
    tipe: str


def fuzzy_match(text: str, query: str) -> bool:
    """True when every character of ``query`` appears in ``text`` in order."""
    remaining = iter(text.lower())
    return all(char in remaining for char in query.lower())


class WilayahSearchEngine:
    """Scored substring and subsequence search over region names and codes."""

    def __init__(self, items: List[Wilayah]):
        self.items = items

    def score(self, item: Wilayah, query: str) -> int:
        query_lower = query.lower()
        nama = item.nama.lower()
        score = 0
        if nama == query_lower:
            score += 100
        if nama.startswith(query_lower):
            score += 50
        if query_lower in nama:
            score += 30
        if fuzzy_match(item.nama, query):
            score += 10
        if query in item.kode:
            score += 40
        return score + TYPE_WEIGHTS.get(item.tipe, 0)

    def search(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Matches ordered by score, best first; ties keep file order."""
        if not query:
            return [dict(vars(item), score=0) for item in self.items[:limit]]
        query_lower = query.lower()
        matches = [
            item
            for item in self.items
            if query_lower in item.nama.lower() or query in item.kode or fuzzy_match(item.nama, query)
        ]
        scored = [dict(vars(item), score=self.score(item, query)) for item in matches]
        scored.sort(key=lambda entry: entry["score"], reverse=True)
        return scored[:limit]


_engines: Dict[str, WilayahSearchEngine] = {}
_countries: Dict[str, List[Dict[str, str]]] = {}


def _read_json(path: Union[str, Path], what: str) -> Any:
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError:
        logger.error(f"{what} data file not found: {path}")
        raise ServiceUnavailableError(f"{what} data is not available")
    except json.JSONDecodeError as exc:
        logger.error(f"{what} data file {path} is not valid JSON: {exc}")
        raise ServiceUnavailableError(f"{what} data is not available")


def load_wilayah(path: Union[str, Path]) -> WilayahSearchEngine:
    key = str(path)
    if key not in _engines:
        raw = _read_json(path, "Wilayah")
        try:
            items = [Wilayah(kode=str(r["kode"]), nama=str(r["nama"]), tipe=str(r.get("tipe", ""))) for r in raw]
        except (KeyError, TypeError, AttributeError) as exc:
            logger.error(f"Wilayah data file {path} has an unexpected layout: {exc}")
            raise ServiceUnavailableError("Wilayah data is not available")
        _engines[key] = WilayahSearchEngine(items)
        logger.info(f"Loaded {len(items)} wilayah from {path}")
    return _engines[key]


def load_countries(path: Union[str, Path]) -> List[Dict[str, str]]:
    """Countries as ``{"code", "name", "dial", "flagUrl"}``."""
    key = str(path)
    if key not in _countries:
        raw = _read_json(path, "Country")
        countries = []
        for entry in raw:
            flags = entry.get("flags") or {}
            calling_codes = entry.get("callingCodes") or []
            countries.append(
                {
                    "code": entry.get("alpha2Code", ""),
                    "name": entry.get("name", ""),
                    "dial": calling_codes[0] if calling_codes else "",
                    "flagUrl": flags.get("svg") or flags.get("png") or "",
                }
            )
        _countries[key] = countries
    return _countries[key]


def clear_cache() -> None:
    _engines.clear()
    _countries.clear()
