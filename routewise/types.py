"""
Data types shared across RouteWise.

Milestones and coordinates are immutable; the planner and the tracker
produce updated copies with :func:`dataclasses.replace` instead of
editing the caller's objects.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Literal, Optional

from .constants import DEFAULT_STAY_MINUTES

TransportMode = Literal["walking", "cycling", "driving"]

TRANSPORT_MODES = ("walking", "cycling", "driving")


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def as_tuple(self) -> tuple:
        return self.latitude, self.longitude


@dataclass(frozen=True)
class Milestone:
    id: str
    name: str
    address: str
    coordinates: Coordinate
    estimated_duration: float = DEFAULT_STAY_MINUTES  # minutes
    order: int = 0
    completed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RouteSegment:
    from_milestone: Milestone
    to_milestone: Milestone
    distance_km: float
    travel_time_minutes: float

    def to_dict(self) -> dict:
        return {
            "from": self.from_milestone.to_dict(),
            "to": self.to_milestone.to_dict(),
            "distance_km": self.distance_km,
            "travel_time_minutes": self.travel_time_minutes,
        }


@dataclass
class RouteValidationResult:
    valid: bool = True
    reasons: List[str] = field(default_factory=list)


@dataclass
class OptimizedRoute:
    milestones: List[Milestone]
    route_segments: List[RouteSegment]
    total_distance: float  # km
    estimated_total_time: float  # minutes, travel plus stays
    starting_point: Optional[Milestone]
    validation: RouteValidationResult

    def to_dict(self) -> dict:
        return {
            "milestones": [m.to_dict() for m in self.milestones],
            "route_segments": [s.to_dict() for s in self.route_segments],
            "total_distance": self.total_distance,
            "estimated_total_time": self.estimated_total_time,
            "starting_point": self.starting_point.to_dict() if self.starting_point else None,
            "validation": asdict(self.validation),
        }


@dataclass
class TimelineEntry:
    milestone: Milestone
    arrival_minutes: float
