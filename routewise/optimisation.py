"""
Route optimisation heuristics for RouteWise.

This module implements the open-path travelling salesman heuristics the
planner uses to order milestones:

    - ``nearest_neighbor``: build an initial route by repeatedly
      visiting the nearest unvisited location.
    - ``two_opt``: improve a route by reversing sub-paths while that
      shortens it.

Both operate on a symmetric distance matrix. Routes are paths, not
tours: nothing is charged for returning to the start.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .constants import TWO_OPT_EPSILON_KM
from .routing import haversine_distance
from .types import Coordinate, Milestone

logger = logging.getLogger(__name__)


def _comparable(dist: float) -> float:
    # nan sorts after every real distance
    return math.inf if math.isnan(dist) else dist


def tour_length(route: Sequence[int], dist_matrix: Sequence[Sequence[float]]) -> float:
    """Total length of the open path ``route``."""
    length = 0.0
    for i in range(len(route) - 1):
        length += dist_matrix[route[i]][route[i + 1]]
    return length


def nearest_neighbor(dist_matrix: Sequence[Sequence[float]], start: int = 0) -> List[int]:
    """Construct an initial route using the nearest neighbor heuristic.

    Ties go to the lowest index. Locations whose distances are undefined
    (``nan``) are visited last rather than dropped.

    Args:
        dist_matrix: A square matrix of distances.
        start: Index of the start location in the matrix.

    Returns:
        A list of indices representing the visiting order, starting
        with ``start`` and including all other indices exactly once.
    """
    n = len(dist_matrix)
    if n == 0:
        return []
    visited = {start}
    route = [start]
    while len(route) < n:
        current = route[-1]
        candidates = [j for j in range(n) if j not in visited]
        if not candidates:
            break
        next_city = min(candidates, key=lambda j: _comparable(dist_matrix[current][j]))
        route.append(next_city)
        visited.add(next_city)
    return route


def two_opt(route: List[int], dist_matrix: Sequence[Sequence[float]]) -> List[int]:
    """Perform 2-opt optimisation on an open route.

    The first stop never moves. For each pair of edges ``(i-1, i)`` and
    ``(k, k+1)`` the sub-path ``route[i..k]`` is reversed when that
    shortens the path by more than ``TWO_OPT_EPSILON_KM``. The first
    improving swap is applied and scanning restarts from the beginning;
    the search ends after a full pass without improvement.

    Args:
        route: Initial route as a list of indices.
        dist_matrix: Square matrix of distances corresponding to the
            indices in ``route``.

    Returns:
        A route no longer than the input.
    """
    best = list(route)
    n = len(best)
    swaps = 0
    improved = True
    while improved:
        improved = False
        for i in range(1, n - 2):
            for k in range(i + 1, n - 1):
                a, b = best[i - 1], best[i]
                c, d = best[k], best[k + 1]
                current = dist_matrix[a][b] + dist_matrix[c][d]
                swapped = dist_matrix[a][c] + dist_matrix[b][d]
                if swapped + TWO_OPT_EPSILON_KM < current:
                    best = best[:i] + best[i:k + 1][::-1] + best[k + 1:]
                    swaps += 1
                    improved = True
                    break
            if improved:
                break
    logger.debug("2-opt accepted %d swaps", swaps)
    return best


def suggest_start_index(milestones: Sequence[Milestone], user_location: Optional[Coordinate]) -> int:
    """Index of the milestone closest to ``user_location`` (0 when unknown)."""
    if not milestones or user_location is None:
        return 0
    best_idx = 0
    best_dist = math.inf
    for i, milestone in enumerate(milestones):
        dist = haversine_distance(user_location, milestone.coordinates)
        if dist < best_dist:
            best_dist = dist
            best_idx = i
    return best_idx
