# backend/utils/geocode.py

import logging
from typing import List, Optional

import requests

import config

logger = logging.getLogger(__name__)


def _get(path: str, params: dict):
    url = f"{config.NOMINATIM_URL}/{path}"
    headers = {"User-Agent": config.USER_AGENT, "Accept": "application/json"}

    response = requests.get(url, params={**params, "format": "json"}, headers=headers, timeout=config.HTTP_TIMEOUT)
    response.raise_for_status()
    return response.json()


def geocode_address(address: str) -> Optional[dict]:
    """Convert an address to ``{"lat", "lng", "address"}``, or None if nothing matched."""
    if not address or not address.strip():
        return None

    try:
        results = _get("search", {"q": address, "limit": 1})
    except (requests.RequestException, ValueError) as e:
        logger.error("[GEOCODE] Geocoding error for %r: %s", address, e)
        return None

    if not results:
        logger.warning("[GEOCODE] No results found for address: %s", address)
        return None

    try:
        first = results[0]
        return {
            "lat": float(first["lat"]),
            "lng": float(first["lon"]),
            "address": first.get("display_name"),
        }
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.error("[GEOCODE] Unusable result for %r: %s", address, e)
        return None


def reverse_geocode(lat: float, lng: float, prefer_locality: bool = False) -> Optional[str]:
    """Convert coordinates to an address string.

    With ``prefer_locality`` the city or town name wins over the full display name,
    which is what the location setup screen shows for device-derived positions.
    """
    try:
        data = _get("reverse", {"lat": lat, "lon": lng})
    except (requests.RequestException, ValueError) as e:
        logger.error("[GEOCODE] Reverse geocoding error for (%s, %s): %s", lat, lng, e)
        return None

    if not isinstance(data, dict):
        return None
    if prefer_locality:
        address = data.get("address") or {}
        return address.get("city") or address.get("town") or data.get("display_name") or None
    return data.get("display_name") or None


def search_locations(query: str, limit: int = 8) -> List[dict]:
    """Address suggestions for the add-event form."""
    if not query or len(query.strip()) < 2:
        return []

    try:
        results = _get("search", {"q": query, "limit": limit})
    except (requests.RequestException, ValueError) as e:
        logger.error("[GEOCODE] Location search error for %r: %s", query, e)
        return []

    suggestions = []
    for item in results:
        try:
            suggestions.append({
                "display_name": item.get("display_name", ""),
                "lat": float(item["lat"]),
                "lng": float(item["lon"]),
            })
        except (AttributeError, KeyError, TypeError, ValueError):
            continue
    return suggestions
