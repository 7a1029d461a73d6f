"""
Map visualisation utilities for RouteWise.

This module provides a helper function to build an interactive map of
an optimised route using the Folium library. It renders numbered
markers for each milestone in visiting order and draws the route as a
polyline. The map can be embedded directly in a Streamlit app via
``streamlit_folium``.
"""

from __future__ import annotations

import math

import folium

from .routing import format_distance
from .types import Coordinate, OptimizedRoute

PENDING_COLOUR = "#007bff"
COMPLETED_COLOUR = "#9e9e9e"


def _marker_html(order: int, colour: str) -> str:
    return (
        f"<div style='font-size: 12px; color: white; background-color: {colour}; "
        "border-radius: 50%; width: 24px; height: 24px; text-align: center; "
        f"line-height: 24px;'>{order}</div>"
    )


def _drawable(coord: Coordinate) -> bool:
    return math.isfinite(coord.latitude) and math.isfinite(coord.longitude)


def create_route_map(route: OptimizedRoute) -> folium.Map:
    """Create a Folium map with numbered markers and a polyline for the route.

    Milestones with non-finite coordinates keep their number but are not
    drawn, and neither are the legs touching them.

    Args:
        route: The optimised route to draw.

    Returns:
        A Folium Map object ready for display.
    """
    coords = [m.coordinates.as_tuple() for m in route.milestones if _drawable(m.coordinates)]
    if not coords:
        return folium.Map(location=[0, 0], zoom_start=2)
    # Compute map centre as the mean of all drawable coordinates
    avg_lat = sum(lat for lat, _ in coords) / len(coords)
    avg_lon = sum(lon for _, lon in coords) / len(coords)
    m = folium.Map(location=[avg_lat, avg_lon], zoom_start=13, tiles="OpenStreetMap")
    for position, milestone in enumerate(route.milestones, start=1):
        if not _drawable(milestone.coordinates):
            continue
        colour = COMPLETED_COLOUR if milestone.completed else PENDING_COLOUR
        folium.Marker(
            location=list(milestone.coordinates.as_tuple()),
            popup=folium.Popup(f"{position}. {milestone.name}", parse_html=True),
            tooltip=milestone.address,
            icon=folium.DivIcon(html=_marker_html(position, colour)),
        ).add_to(m)
    for seg in route.route_segments:
        if not (_drawable(seg.from_milestone.coordinates) and _drawable(seg.to_milestone.coordinates)):
            continue
        folium.PolyLine(
            [list(seg.from_milestone.coordinates.as_tuple()), list(seg.to_milestone.coordinates.as_tuple())],
            color=PENDING_COLOUR,
            weight=4,
            opacity=0.6,
            tooltip=format_distance(seg.distance_km),
        ).add_to(m)
    return m
