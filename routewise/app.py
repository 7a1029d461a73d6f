"""
Streamlit application for RouteWise route planning.

This script defines the user interface around the planning engine: it
geocodes the entered places, orders them with ``optimize_route``,
shows the timeline and an interactive map, and keeps the trips planned
in the current session.

To run this app locally for development, install the package and
execute:

    streamlit run routewise/app.py

An optional ``NOMINATIM_USER_AGENT`` can be set in Streamlit's secrets.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

import streamlit as st
from streamlit_folium import folium_static

from routewise.constants import (
    DEFAULT_MODE,
    DEFAULT_STAY_MINUTES,
    MAX_MILESTONES,
    MIN_MILESTONES,
)
from routewise.geocode import geocode_address, set_user_agent
from routewise.history import TripHistory
from routewise.planner import optimize_route
from routewise.routing import format_distance
from routewise.schedule import build_timeline, format_minutes, format_stay, schedule_timeline
from routewise.types import TRANSPORT_MODES, Coordinate, Milestone
from routewise.visualisation import create_route_map

logger = logging.getLogger(__name__)


def parse_place_lines(text: str) -> List[tuple]:
    """Split the place input into ``(address, stay_minutes)`` pairs.

    Each line is ``address`` or ``address | minutes``. Blank lines are
    ignored; an unreadable stay falls back to the default.
    """
    places = []
    for line in text.splitlines():
        if not line.strip():
            continue
        address, _, stay = line.partition("|")
        try:
            minutes = max(0.0, float(stay)) if stay.strip() else DEFAULT_STAY_MINUTES
        except ValueError:
            minutes = DEFAULT_STAY_MINUTES
        places.append((address.strip(), minutes))
    return places


def geocode_places(places: List[tuple]) -> Optional[List[Milestone]]:
    """Geocode each place into a milestone.

    Returns ``None`` if any address fails to geocode.
    """
    milestones = []
    for i, (address, minutes) in enumerate(places):
        coord = geocode_address(address)
        if coord is None:
            logger.warning("Could not geocode %r", address)
            return None
        milestones.append(
            Milestone(
                id=f"m{i}",
                name=address.split(",")[0],
                address=address,
                coordinates=coord,
                estimated_duration=minutes,
                order=i,
            )
        )
    return milestones


def get_history() -> TripHistory:
    if "history" not in st.session_state:
        st.session_state["history"] = TripHistory()
    return st.session_state["history"]


def render_route(route, depart_time: str) -> None:
    st.success(
        f"Total distance: {format_distance(route.total_distance)} · "
        f"Estimated time: {format_minutes(route.estimated_total_time)}"
    )
    for reason in route.validation.reasons:
        st.warning(reason)

    timeline = build_timeline(route.milestones, route.route_segments)
    try:
        clock = schedule_timeline(timeline, depart_time)
    except ValueError:
        st.error("Departure time must be HH:MM.")
        clock = None
    rows = []
    for i, entry in enumerate(timeline):
        row = {
            "#": i + 1,
            "Place": entry.milestone.name,
            "Arrive after": format_minutes(entry.arrival_minutes),
            "Stay": format_stay(entry.milestone.estimated_duration),
        }
        if clock:
            row["Arrival"] = clock[i].arrival.strftime("%H:%M")
            row["Departure"] = clock[i].departure.strftime("%H:%M")
        rows.append(row)
    st.table(rows)
    folium_static(create_route_map(route), width=700, height=500)
    st.download_button(
        "Download route (JSON)",
        json.dumps(route.to_dict(), ensure_ascii=False, indent=2),
        file_name="route.json",
        mime="application/json",
    )


def render_history(history: TripHistory) -> None:
    st.subheader("Recent trips")
    if not len(history):
        st.caption("No trips planned yet.")
        return
    for trip in history.trips:
        col_name, col_stats, col_remove = st.columns([3, 2, 1])
        with col_name:
            st.write(f"**{trip.name}**  \n{trip.created_at:%Y-%m-%d %H:%M}")
        with col_stats:
            st.write(
                f"{format_distance(trip.total_distance)} · "
                f"{format_minutes(trip.estimated_total_time)} · {trip.milestone_count} stops"
            )
        with col_remove:
            if st.button("Remove", key=f"remove_{trip.id}"):
                history.remove(trip.id)
                st.rerun()
    st.download_button(
        "Export trips (JSON)",
        json.dumps(history.export(), ensure_ascii=False, indent=2),
        file_name="recent_trips.json",
        mime="application/json",
    )
    if st.button("Clear all"):
        history.clear()
        st.rerun()


def main():
    logging.basicConfig(level=logging.INFO)
    st.set_page_config(page_title="RouteWise", layout="wide")
    st.title("RouteWise route planner")
    try:
        user_agent = st.secrets.get("NOMINATIM_USER_AGENT")
    except FileNotFoundError:
        user_agent = None
    if user_agent:
        set_user_agent(user_agent)
    history = get_history()

    with st.form("route_form"):
        places_text = st.text_area(
            "Places (one per line, optional stay in minutes after '|')",
            height=200,
            help="Example: Tokyo Tower | 45",
        )
        mode = st.radio("Transport mode", TRANSPORT_MODES, index=TRANSPORT_MODES.index(DEFAULT_MODE), horizontal=True)
        start_name = st.text_input("Start at (name, optional)")
        col_lat, col_lon = st.columns(2)
        with col_lat:
            my_lat = st.text_input("My latitude (optional)")
        with col_lon:
            my_lon = st.text_input("My longitude (optional)")
        use_two_opt = st.checkbox("Refine with 2-opt", value=True)
        depart_time = st.text_input("Departure time (HH:MM)", value="09:00")
        generate = st.form_submit_button("Plan route")

    if generate:
        places = parse_place_lines(places_text)
        if not MIN_MILESTONES <= len(places) <= MAX_MILESTONES:
            st.error(f"Enter between {MIN_MILESTONES} and {MAX_MILESTONES} places.")
            st.stop()
        with st.spinner("Geocoding places…"):
            milestones = geocode_places(places)
        if milestones is None:
            st.error("Some places could not be geocoded. Please check the input.")
            st.stop()

        user_location = None
        if my_lat.strip() and my_lon.strip():
            try:
                user_location = Coordinate(float(my_lat), float(my_lon))
            except ValueError:
                st.warning("Ignoring unreadable location.")
        start_id = next((m.id for m in milestones if start_name.strip() and m.name == start_name.strip()), None)

        route = optimize_route(
            milestones,
            start_id=start_id,
            user_location=user_location,
            use_two_opt=use_two_opt,
            mode=mode,
        )
        history.add(route)
        render_route(route, depart_time)

    render_history(history)


if __name__ == "__main__":
    main()
