import asyncio
from functools import partial
from typing import Dict, Any

from fastapi import APIRouter, Query, HTTPException, status

from utils.geocode import geocode_address, reverse_geocode, search_locations

router = APIRouter(prefix="/geocode", tags=["geocode"])


@router.get("")
async def forward_geocode(address: str = Query(..., min_length=1)) -> Dict[str, Any]:
    """Address -> coordinates."""
    # Nominatim lookups are synchronous, run them in the thread pool
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, partial(geocode_address, address))
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Could not geocode address: {address}")
    return result


@router.get("/reverse")
async def reverse(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    prefer_locality: bool = Query(False, description="Prefer city/town over the full address"),
) -> Dict[str, Any]:
    """Coordinates -> address; falls back to the formatted coordinates."""
    loop = asyncio.get_running_loop()
    address = await loop.run_in_executor(None, partial(reverse_geocode, lat, lng, prefer_locality=prefer_locality))
    return {
        "lat": lat,
        "lng": lng,
        "address": address or f"{lat:.4f}, {lng:.4f}",
        "resolved": address is not None,
    }


@router.get("/suggest")
async def suggest(q: str = Query(""), limit: int = Query(8, ge=1, le=20)) -> Dict[str, Any]:
    """Address suggestions for the add-event form."""
    loop = asyncio.get_running_loop()
    suggestions = await loop.run_in_executor(None, partial(search_locations, q, limit=limit))
    return {"suggestions": suggestions}
