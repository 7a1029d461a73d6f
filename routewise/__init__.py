"""
RouteWise package initialization.

This package plans the visiting order of a handful of places and prices
the resulting route. The planning engine is made of pure functions;
place search, progress tracking, trip history and map rendering sit
around it as separate modules.

Modules:
    types         – Dataclasses for milestones, segments and routes.
    routing       – Haversine distances, distance matrix and timed legs.
    optimisation  – Nearest neighbour and 2‑opt heuristics.
    validation    – Advisory feasibility checks for a built route.
    planner       – ``optimize_route``, the single entry point.
    schedule      – Arrival timeline and clock-time schedule.
    geocode       – Place search using Nominatim.
    tracking      – Marks milestones reached from position updates.
    history       – Recently planned trips.
    visualisation – Folium based map creation utilities.

Distances are great-circle estimates with a constant speed per transport
mode; there is no road network behind them.
"""

__all__ = [
    "types",
    "routing",
    "optimisation",
    "validation",
    "planner",
    "schedule",
    "geocode",
    "tracking",
    "history",
    "visualisation",
]
