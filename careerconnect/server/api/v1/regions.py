"""
Public region lookups used by the registration forms: Indonesian wilayah
search and the country list with dialing codes.
"""

from fastapi import APIRouter, Query

from careerconnect.core.regions import MIN_QUERY_LENGTH, load_countries, load_wilayah
from careerconnect.server.core.config import settings

router = APIRouter(tags=["regions"])


@router.get(
    "/wilayah/search",
    summary="Search Wilayah",
    description="Scored search over region names and codes. Queries shorter than two characters return an empty list.",
    responses={503: {"description": "Region data file missing"}},
)
async def search_wilayah(q: str = "", limit: int = Query(10, ge=1, le=100)):
    if len(q) < MIN_QUERY_LENGTH:
        return []
    results = load_wilayah(settings.integrations.wilayah_data_path).search(q, limit)
    return {"success": True, "data": results, "meta": {"query": q, "limit": limit, "total": len(results)}}


@router.get(
    "/countries",
    summary="List Countries",
    responses={503: {"description": "Country data file missing"}},
)
async def list_countries():
    countries = load_countries(settings.integrations.countries_data_path)
    return {"success": True, "total": len(countries), "data": countries}
