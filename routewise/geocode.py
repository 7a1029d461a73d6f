"""
Place search for RouteWise.

This module provides a thin wrapper around the `geopy` library to turn
free-form text into candidate milestones. It uses OpenStreetMap's
Nominatim service via geopy's API. Single-address lookups are cached in
memory to avoid repeated queries for the same address.

Example usage:

    from routewise.geocode import search_places
    candidates = search_places("Tokyo Tower")

Lookups never raise on network trouble; they log and return an empty
result instead.
"""

from __future__ import annotations

import hashlib
import logging
from functools import lru_cache
from typing import List, Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from .constants import DEFAULT_STAY_MINUTES, NOMINATIM_USER_AGENT
from .routing import haversine_distance
from .types import Coordinate, Milestone

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

_geocoder: Optional[Nominatim] = None


def _get_geocoder() -> Nominatim:
    """Return a singleton Nominatim geocoder instance."""
    global _geocoder
    if _geocoder is None:
        # Nominatim's usage policy requires an identifying user agent.
        _geocoder = Nominatim(user_agent=NOMINATIM_USER_AGENT)
    return _geocoder


def set_user_agent(user_agent: str) -> None:
    """Replace the geocoder with one identifying as ``user_agent``."""
    global _geocoder
    _geocoder = Nominatim(user_agent=user_agent)
    clear_cache()


def _place_id(location) -> str:
    raw = getattr(location, "raw", None) or {}
    if raw.get("osm_type") and raw.get("osm_id") is not None:
        return f"{raw['osm_type']}:{raw['osm_id']}"
    return hashlib.sha1(location.address.encode("utf-8")).hexdigest()[:12]


def location_to_milestone(location, estimated_duration: float = DEFAULT_STAY_MINUTES) -> Milestone:
    """Convert a geopy ``Location`` into a milestone."""
    raw = getattr(location, "raw", None) or {}
    address = location.address or ""
    name = raw.get("name") or address.split(",")[0].strip() or address
    return Milestone(
        id=_place_id(location),
        name=name,
        address=address,
        coordinates=Coordinate(location.latitude, location.longitude),
        estimated_duration=estimated_duration,
    )


def search_places(query: str, limit: int = 5, near: Optional[Coordinate] = None) -> List[Milestone]:
    """Look up candidate milestones matching ``query``.

    Args:
        query: Free form search text.
        limit: Maximum number of candidates.
        near: Optional caller position; candidates are returned
            closest first when given.

    Returns:
        A list of milestones, empty when nothing matched or the
        service could not be reached.
    """
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []
    geocoder = _get_geocoder()
    try:
        locations = geocoder.geocode(query, exactly_one=False, limit=limit, timeout=10)
    except (GeocoderTimedOut, GeocoderServiceError) as exc:
        logger.warning("Place search for %r failed: %s", query, exc)
        return []
    candidates = [location_to_milestone(loc) for loc in (locations or [])]
    if near is not None:
        candidates.sort(key=lambda m: haversine_distance(near, m.coordinates))
    logger.info("Place search for %r returned %d candidates", query, len(candidates))
    return candidates


class _LookupFailed(Exception):
    """Raised inside the cached lookup so failures are not memoised."""


@lru_cache(maxsize=128)
def _lookup_address(address: str) -> Optional[Coordinate]:
    geocoder = _get_geocoder()
    for timeout in (10, 20):
        try:
            location = geocoder.geocode(address, timeout=timeout)
        except (GeocoderTimedOut, GeocoderServiceError) as exc:
            logger.warning("Geocoding %r failed (timeout=%ss): %s", address, timeout, exc)
            continue
        if location:
            return Coordinate(location.latitude, location.longitude)
        return None
    raise _LookupFailed(address)


def geocode_address(address: str) -> Optional[Coordinate]:
    """Geocode an address and return its coordinate or ``None``.

    If a timeout or service error occurs, the request is retried once
    with a longer timeout. Answers from the service (found or not found)
    are cached; failed lookups are retried on the next call.
    """
    try:
        return _lookup_address(address)
    except _LookupFailed:
        return None


def clear_cache() -> None:
    _lookup_address.cache_clear()
