"""
Progress tracking along a route.

The tracker does not talk to any location service. The caller feeds it
one position at a time (from GPS, a replayed log, a test fixture) and
gets back which milestones have been reached. ``track_positions`` adapts
any iterable of positions into a stream of updates.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Sequence

from .constants import DEFAULT_DISTANCE_INTERVAL_M, DEFAULT_RADIUS_METERS
from .routing import haversine_distance
from .types import Coordinate, Milestone

logger = logging.getLogger(__name__)


@dataclass
class ProgressUpdate:
    coordinates: Coordinate
    reached_milestone_ids: List[str]
    nearest_id: Optional[str]
    nearest_meters: float


class ProgressTracker:
    """Marks milestones completed as the caller's position comes within range."""

    def __init__(self, milestones: Sequence[Milestone], radius_m: float = DEFAULT_RADIUS_METERS):
        self.radius_m = radius_m
        self._milestones = list(milestones)

    @property
    def milestones(self) -> List[Milestone]:
        return list(self._milestones)

    @property
    def completed_count(self) -> int:
        return sum(1 for m in self._milestones if m.completed)

    @property
    def progress(self) -> float:
        """Percentage of milestones completed."""
        if not self._milestones:
            return 0.0
        return self.completed_count / len(self._milestones) * 100.0

    @property
    def current_milestone(self) -> Optional[Milestone]:
        """First milestone in route order not yet completed."""
        return next((m for m in self._milestones if not m.completed), None)

    def update(self, position: Coordinate) -> ProgressUpdate:
        nearest_id = None
        nearest_meters = math.inf
        reached = []
        for milestone in self._milestones:
            if milestone.completed:
                continue
            meters = haversine_distance(milestone.coordinates, position) * 1000.0
            if meters < nearest_meters:
                nearest_meters = meters
                nearest_id = milestone.id
            if meters <= self.radius_m:
                reached.append(milestone.id)

        if reached:
            self._milestones = [
                replace(m, completed=True) if m.id in reached else m for m in self._milestones
            ]
            logger.info("Reached milestones %s", reached)
        logger.debug(
            "Position update (%.6f, %.6f), nearest=%s at %.0f m",
            position.latitude,
            position.longitude,
            nearest_id,
            nearest_meters,
        )
        return ProgressUpdate(
            coordinates=position,
            reached_milestone_ids=reached,
            nearest_id=nearest_id,
            nearest_meters=nearest_meters,
        )


def track_positions(
    milestones: Sequence[Milestone],
    positions: Iterable[Coordinate],
    radius_m: float = DEFAULT_RADIUS_METERS,
    distance_interval_m: float = DEFAULT_DISTANCE_INTERVAL_M,
) -> Iterator[ProgressUpdate]:
    """Yield a ``ProgressUpdate`` for each position in ``positions``.

    Positions closer than ``distance_interval_m`` to the last one handled
    are skipped; pass 0 to handle every position.
    """
    tracker = ProgressTracker(milestones, radius_m=radius_m)
    last = None
    for position in positions:
        if last is not None and haversine_distance(last, position) * 1000.0 < distance_interval_m:
            continue
        last = position
        yield tracker.update(position)
