import json
import unittest
from datetime import datetime, timedelta

from routewise.history import TripHistory, generate_trip_name
from routewise.planner import optimize_route
from routewise.types import Coordinate, Milestone


def _route(*names):
    milestones = [
        Milestone(id=n, name=n, address="", coordinates=Coordinate(0.0, i * 0.01)) for i, n in enumerate(names)
    ]
    return optimize_route(milestones)


class TestTripNames(unittest.TestCase):
    def test_names(self):
        self.assertEqual(generate_trip_name(_route()), "Empty Route")
        self.assertEqual(generate_trip_name(_route("Museum")), "Trip to Museum")
        self.assertEqual(generate_trip_name(_route("Museum", "Park")), "Museum → Park")
        self.assertEqual(generate_trip_name(_route("Museum", "Park", "Cafe", "Pier")), "Museum + 3 stops")


class TestTripHistory(unittest.TestCase):
    def test_add(self):
        history = TripHistory()
        route = _route("Museum", "Park", "Cafe")
        now = datetime(2024, 5, 1, 12, 0)
        trip = history.add(route, now=now)
        self.assertEqual(trip.name, "Museum + 2 stops")
        self.assertEqual(trip.created_at, now)
        self.assertEqual(trip.milestone_count, 3)
        self.assertEqual(trip.total_distance, route.total_distance)
        self.assertEqual(trip.estimated_total_time, route.estimated_total_time)
        self.assertIs(history.get(trip.id), trip)

    def test_custom_name(self):
        history = TripHistory()
        self.assertEqual(history.add(_route("A", "B"), name="Saturday").name, "Saturday")

    def test_newest_first_and_capped(self):
        history = TripHistory()
        start = datetime(2024, 5, 1, 12, 0)
        for i in range(25):
            history.add(_route("A", "B"), name=f"trip {i}", now=start + timedelta(minutes=i))
        self.assertEqual(len(history), 20)
        names = [t.name for t in history.trips]
        self.assertEqual(names[0], "trip 24")
        self.assertEqual(names[-1], "trip 5")

    def test_ids_unique_for_same_timestamp(self):
        history = TripHistory()
        now = datetime(2024, 5, 1, 12, 0)
        first = history.add(_route("A"), now=now)
        second = history.add(_route("B"), now=now)
        self.assertNotEqual(first.id, second.id)

    def test_export(self):
        history = TripHistory()
        route = _route("Museum", "Park")
        trip = history.add(route, now=datetime(2024, 5, 1, 12, 0))
        exported = history.export()
        self.assertEqual(len(exported), 1)
        data = exported[0]
        self.assertEqual(data["id"], trip.id)
        self.assertEqual(data["name"], "Museum → Park")
        self.assertEqual(data["created_at"], "2024-05-01T12:00:00")
        self.assertEqual(data["milestone_count"], 2)
        self.assertEqual([m["name"] for m in data["route"]["milestones"]], ["Museum", "Park"])
        self.assertEqual(data["route"]["milestones"][1]["order"], 1)
        self.assertEqual(data["route"]["milestones"][0]["coordinates"], {"latitude": 0.0, "longitude": 0.0})
        self.assertEqual(data["route"]["starting_point"]["id"], "Museum")
        segment = data["route"]["route_segments"][0]
        self.assertEqual((segment["from"]["id"], segment["to"]["id"]), ("Museum", "Park"))
        self.assertAlmostEqual(segment["distance_km"], route.total_distance)
        self.assertEqual(data["route"]["validation"], {"valid": True, "reasons": []})
        # JSON ready
        self.assertEqual(json.loads(json.dumps(exported)), exported)

    def test_remove_and_clear(self):
        history = TripHistory(max_trips=3)
        trip = history.add(_route("A"), now=datetime(2024, 5, 1))
        history.add(_route("B"), now=datetime(2024, 5, 2))
        self.assertTrue(history.remove(trip.id))
        self.assertFalse(history.remove(trip.id))
        self.assertEqual(len(history), 1)
        history.clear()
        self.assertEqual(history.trips, [])


if __name__ == "__main__":
    unittest.main()
