"""Shared constants for the RouteWise engine and its collaborators."""

EARTH_RADIUS_KM = 6371.0

# Constant average speeds (km/h) used to turn distance into travel time.
SPEED_KMH = {
    "walking": 5.0,
    "cycling": 15.0,
    "driving": 40.0,
}
DEFAULT_MODE = "driving"
FALLBACK_MODE = "walking"

# Legs longer than this are flagged when the route is walked.
MAX_WALKING_SEGMENT_KM = 10.0

# Minimum gain (km) for a 2-opt swap to count as an improvement.
TWO_OPT_EPSILON_KM = 1e-9

DEFAULT_STAY_MINUTES = 30

# Location tracking
DEFAULT_RADIUS_METERS = 75.0
DEFAULT_DISTANCE_INTERVAL_M = 25.0

MAX_RECENT_TRIPS = 20

MIN_MILESTONES = 2
MAX_MILESTONES = 10

NOMINATIM_USER_AGENT = "routewise_app"
