"""
Schedule calculation utilities for RouteWise.

This module derives a timeline from an optimised route: the number of
minutes after departure at which each milestone is reached, given the
stay at every stop and the travel time of every leg. A timeline can be
pinned to a wall-clock departure time with ``schedule_timeline``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence

from .types import Milestone, RouteSegment, TimelineEntry


@dataclass
class StopSchedule:
    milestone: Milestone
    arrival: datetime
    departure: datetime


def build_timeline(milestones: Sequence[Milestone], segments: Sequence[RouteSegment]) -> List[TimelineEntry]:
    """Cumulative arrival time (minutes from departure) for each milestone.

    Args:
        milestones: Milestones in visiting order.
        segments: Legs between consecutive milestones.

    Returns:
        One ``TimelineEntry`` per milestone; the first arrives at 0.
    """
    entries: List[TimelineEntry] = []
    cumulative = 0.0
    for i, milestone in enumerate(milestones):
        entries.append(TimelineEntry(milestone=milestone, arrival_minutes=cumulative))
        cumulative += milestone.estimated_duration
        if i < len(segments):
            cumulative += segments[i].travel_time_minutes
    return entries


def parse_time_string(t: str) -> time:
    """Parse a HH:MM formatted time string into a datetime.time object."""
    h, m = map(int, t.strip().split(":"))
    return time(hour=h, minute=m)


def schedule_timeline(
    entries: Sequence[TimelineEntry],
    departure_time_str: str,
    day: Optional[date] = None,
) -> List[StopSchedule]:
    """Pin a timeline to a departure time.

    Args:
        entries: Output of ``build_timeline``.
        departure_time_str: Departure time as HH:MM string (local time).
        day: Date of the trip, today when omitted.

    Returns:
        A ``StopSchedule`` per entry with clock arrival and departure.
    """
    start = datetime.combine(day or date.today(), parse_time_string(departure_time_str))
    schedule: List[StopSchedule] = []
    for entry in entries:
        arrival = start + timedelta(minutes=entry.arrival_minutes)
        departure = arrival + timedelta(minutes=entry.milestone.estimated_duration)
        schedule.append(StopSchedule(milestone=entry.milestone, arrival=arrival, departure=departure))
    return schedule


def format_minutes(total_minutes: float) -> str:
    hours = int(total_minutes // 60)
    mins = round(total_minutes % 60)
    if hours <= 0:
        return f"{mins}m"
    return f"{hours}h {mins}m"


def format_stay(minutes: float) -> str:
    if minutes == 60:
        return "1h"
    if minutes == 120:
        return "2h"
    return f"{minutes:g}m"
