"""Advisory feasibility checks for built routes."""

from __future__ import annotations

import math
from typing import Sequence

from .constants import MAX_WALKING_SEGMENT_KM
from .types import RouteSegment, RouteValidationResult

INVALID_COORDINATES_REASON = "Invalid coordinates detected in route."


def _has_bad_coordinates(segment: RouteSegment) -> bool:
    points = (segment.from_milestone.coordinates, segment.to_milestone.coordinates)
    return any(
        not math.isfinite(p.latitude) or not math.isfinite(p.longitude) for p in points
    )


def validate_route(segments: Sequence[RouteSegment], mode: str) -> RouteValidationResult:
    """Classify a route as valid or not, with a reason for every problem.

    A non-finite coordinate anywhere makes the whole route invalid and
    no further checks run. When walking, every leg over
    ``MAX_WALKING_SEGMENT_KM`` gets its own reason.
    """
    if any(_has_bad_coordinates(seg) for seg in segments):
        return RouteValidationResult(valid=False, reasons=[INVALID_COORDINATES_REASON])

    reasons = []
    if mode == "walking":
        for seg in segments:
            if seg.distance_km > MAX_WALKING_SEGMENT_KM:
                reasons.append(
                    f'Segment from "{seg.from_milestone.name}" to "{seg.to_milestone.name}" '
                    f"is too long for walking ({seg.distance_km:.1f} km)."
                )
    return RouteValidationResult(valid=not reasons, reasons=reasons)
