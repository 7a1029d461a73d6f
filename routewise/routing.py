"""
Distance and travel-time utilities for RouteWise.

Routes are priced with great-circle (haversine) distances and a constant
average speed per transport mode. There is no road network behind these
numbers; they are an estimate that works well enough for the short
city-scale trips the planner is meant for.

Example usage:

    a = Coordinate(35.6586, 139.7454)
    b = Coordinate(35.6812, 139.7671)
    haversine_distance(a, b)          # ~3.2
    format_distance(0.5)              # "500 m"
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from .constants import EARTH_RADIUS_KM, FALLBACK_MODE, SPEED_KMH
from .types import Coordinate, Milestone, RouteSegment

logger = logging.getLogger(__name__)


def haversine_distance(coord1: Coordinate, coord2: Coordinate) -> float:
    """Compute the great-circle distance between two coordinates in kilometers.

    Non-finite inputs yield ``nan`` rather than raising, so a route with a
    broken coordinate can still be built and then flagged by validation.
    """
    values = (coord1.latitude, coord1.longitude, coord2.latitude, coord2.longitude)
    if not all(math.isfinite(v) for v in values):
        return math.nan
    lat1, lon1, lat2, lon2 = values
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def format_distance(km: float) -> str:
    """Render a distance for people: whole metres below 1 km, else km to one decimal.

    Half metres round up.
    """
    if km < 1:
        return f"{math.floor(km * 1000 + 0.5)} m"
    return f"{km:.1f} km"


def compute_distance_matrix(coords: Sequence[Coordinate]) -> List[List[float]]:
    """Build the symmetric n x n distance table (km) for ``coords``.

    Each pair is evaluated once and mirrored, so the result is exactly
    symmetric with a zero diagonal.
    """
    n = len(coords)
    dist_matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            dist = haversine_distance(coords[i], coords[j])
            dist_matrix[i][j] = dist
            dist_matrix[j][i] = dist
    return dist_matrix


def speed_for_mode(mode: str) -> float:
    """Average speed in km/h for ``mode``; unknown modes travel at walking pace."""
    return SPEED_KMH.get(mode, SPEED_KMH[FALLBACK_MODE])


def build_segments(route: Sequence[int], milestones: Sequence[Milestone], mode: str) -> List[RouteSegment]:
    """Turn a visiting order into timed legs.

    Args:
        route: Visiting order as indices into ``milestones``.
        milestones: The milestones the indices refer to.
        mode: Transport mode used to price every leg.

    Returns:
        One ``RouteSegment`` per consecutive pair in ``route``.
    """
    speed = speed_for_mode(mode)
    segments: List[RouteSegment] = []
    for i in range(len(route) - 1):
        origin = milestones[route[i]]
        dest = milestones[route[i + 1]]
        dist = haversine_distance(origin.coordinates, dest.coordinates)
        segments.append(
            RouteSegment(
                from_milestone=origin,
                to_milestone=dest,
                distance_km=dist,
                travel_time_minutes=dist / speed * 60.0,
            )
        )
    logger.debug("Built %d segments at %.1f km/h (%s)", len(segments), speed, mode)
    return segments
