"""In-memory history of recently planned trips."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .constants import MAX_RECENT_TRIPS
from .types import OptimizedRoute


@dataclass
class RecentTrip:
    id: str
    name: str
    created_at: datetime
    route: OptimizedRoute
    total_distance: float
    estimated_total_time: float
    milestone_count: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat(),
            "route": self.route.to_dict(),
            "total_distance": self.total_distance,
            "estimated_total_time": self.estimated_total_time,
            "milestone_count": self.milestone_count,
        }


def generate_trip_name(route: OptimizedRoute) -> str:
    """Short label for a trip based on where it starts and how many stops it has."""
    if not route.milestones:
        return "Empty Route"
    start = route.starting_point or route.milestones[0]
    start_name = start.name or "Unknown"
    count = len(route.milestones)
    if count == 1:
        return f"Trip to {start_name}"
    if count == 2:
        end_name = route.milestones[1].name or "Unknown"
        return f"{start_name} → {end_name}"
    return f"{start_name} + {count - 1} stops"


class TripHistory:
    """Newest-first list of trips, capped at ``max_trips``."""

    def __init__(self, max_trips: int = MAX_RECENT_TRIPS):
        self.max_trips = max_trips
        self._trips: List[RecentTrip] = []

    @property
    def trips(self) -> List[RecentTrip]:
        return list(self._trips)

    def __len__(self) -> int:
        return len(self._trips)

    def add(self, route: OptimizedRoute, name: Optional[str] = None, now: Optional[datetime] = None) -> RecentTrip:
        created_at = now or datetime.now()
        stamp = int(created_at.timestamp() * 1000)
        taken = {trip.id for trip in self._trips}
        while str(stamp) in taken:
            stamp += 1
        trip = RecentTrip(
            id=str(stamp),
            name=name or generate_trip_name(route),
            created_at=created_at,
            route=route,
            total_distance=route.total_distance,
            estimated_total_time=route.estimated_total_time,
            milestone_count=len(route.milestones),
        )
        self._trips = ([trip] + self._trips)[: self.max_trips]
        return trip

    def get(self, trip_id: str) -> Optional[RecentTrip]:
        return next((t for t in self._trips if t.id == trip_id), None)

    def remove(self, trip_id: str) -> bool:
        before = len(self._trips)
        self._trips = [t for t in self._trips if t.id != trip_id]
        return len(self._trips) < before

    def clear(self) -> None:
        self._trips = []

    def export(self) -> List[dict]:
        """Trips as JSON-ready dicts, newest first."""
        return [trip.to_dict() for trip in self._trips]
