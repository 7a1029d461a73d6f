"""
Route planning entry point.

``optimize_route`` strings the pieces together in a single pass:

    milestones -> start index -> distance matrix -> nearest neighbour
    -> (optional) 2-opt -> segments -> totals -> validation

It holds no state between calls and never mutates its arguments, so it
is safe to call repeatedly and from several threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from .constants import DEFAULT_MODE
from .optimisation import nearest_neighbor, suggest_start_index, two_opt
from .routing import build_segments, compute_distance_matrix
from .types import Coordinate, Milestone, OptimizedRoute, RouteValidationResult
from .validation import validate_route

logger = logging.getLogger(__name__)


def resolve_start_index(
    milestones: Sequence[Milestone],
    start_id: Optional[str] = None,
    user_location: Optional[Coordinate] = None,
) -> int:
    """Pick the index the route starts from.

    An explicit ``start_id`` wins; if no milestone carries that id the
    first milestone is used. Without ``start_id`` the milestone nearest
    to ``user_location`` is chosen, or the first one when the location
    is unknown.
    """
    if start_id:
        for i, milestone in enumerate(milestones):
            if milestone.id == start_id:
                return i
        logger.debug("Start id %r not found, falling back to the first milestone", start_id)
        return 0
    return suggest_start_index(milestones, user_location)


def optimize_route(
    milestones: Sequence[Milestone],
    start_id: Optional[str] = None,
    user_location: Optional[Coordinate] = None,
    use_two_opt: bool = False,
    mode: str = DEFAULT_MODE,
) -> OptimizedRoute:
    """Order ``milestones`` into a route and price it.

    Args:
        milestones: Places to visit, in any order.
        start_id: Identifier of the milestone to start from.
        user_location: Caller position, used to suggest a start when
            ``start_id`` is not given.
        use_two_opt: Refine the nearest neighbour route with 2-opt.
        mode: Transport mode (``walking``, ``cycling`` or ``driving``).

    Returns:
        An ``OptimizedRoute`` whose milestones carry their 0-based
        position in ``order``.
    """
    stay_minutes = sum(m.estimated_duration for m in milestones)
    if len(milestones) < 2:
        return OptimizedRoute(
            milestones=list(milestones),
            route_segments=[],
            total_distance=0.0,
            estimated_total_time=stay_minutes,
            starting_point=milestones[0] if milestones else None,
            validation=RouteValidationResult(valid=True, reasons=[]),
        )

    start = resolve_start_index(milestones, start_id, user_location)
    dist_matrix = compute_distance_matrix([m.coordinates for m in milestones])

    route = nearest_neighbor(dist_matrix, start=start)
    logger.debug("Nearest neighbour route from %d: %s", start, route)
    if use_two_opt:
        route = two_opt(route, dist_matrix)
        logger.debug("2-opt route: %s", route)

    ordered = [replace(milestones[idx], order=pos) for pos, idx in enumerate(route)]
    segments = build_segments(list(range(len(ordered))), ordered, mode)
    total_distance = sum(seg.distance_km for seg in segments)
    travel_minutes = sum(seg.travel_time_minutes for seg in segments)

    return OptimizedRoute(
        milestones=ordered,
        route_segments=segments,
        total_distance=total_distance,
        estimated_total_time=travel_minutes + stay_minutes,
        starting_point=ordered[0],
        validation=validate_route(segments, mode),
    )
