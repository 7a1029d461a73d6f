import math
import unittest
from dataclasses import replace

import folium

from routewise.planner import optimize_route
from routewise.types import Coordinate, Milestone
from routewise.visualisation import create_route_map


def _children(fmap, kind):
    return [child for child in fmap._children.values() if isinstance(child, kind)]


class TestVisualisation(unittest.TestCase):
    def test_route_map(self):
        milestones = [
            Milestone(id="a", name="Tokyo Tower", address="Minato", coordinates=Coordinate(35.6586, 139.7454)),
            Milestone(id="b", name="Tokyo Station", address="Chiyoda", coordinates=Coordinate(35.6812, 139.7671)),
            Milestone(id="c", name="Shibuya", address="Shibuya", coordinates=Coordinate(35.6580, 139.7016)),
        ]
        route = optimize_route(milestones, use_two_opt=True)
        fmap = create_route_map(route)
        self.assertIsInstance(fmap, folium.Map)
        self.assertEqual(len(_children(fmap, folium.Marker)), 3)
        self.assertEqual(len(_children(fmap, folium.PolyLine)), 2)

    def test_completed_marker_is_grey(self):
        only = Milestone(id="a", name="Done", address="", coordinates=Coordinate(1.0, 1.0))
        route = optimize_route([replace(only, completed=True)])
        html = create_route_map(route).get_root().render()
        self.assertIn("#9e9e9e", html)

    def test_invalid_coordinates_are_left_off_the_map(self):
        milestones = [
            Milestone(id="a", name="A", address="", coordinates=Coordinate(0.0, 0.0)),
            Milestone(id="b", name="B", address="", coordinates=Coordinate(math.nan, 0.0)),
        ]
        route = optimize_route(milestones)
        self.assertFalse(route.validation.valid)
        fmap = create_route_map(route)
        self.assertEqual(fmap.location, [0.0, 0.0])
        self.assertEqual(len(_children(fmap, folium.Marker)), 1)
        self.assertEqual(_children(fmap, folium.PolyLine), [])
        fmap.get_root().render()

    def test_nothing_drawable_shows_world(self):
        milestones = [
            Milestone(id="a", name="A", address="", coordinates=Coordinate(math.nan, 1.0)),
            Milestone(id="b", name="B", address="", coordinates=Coordinate(2.0, math.inf)),
        ]
        fmap = create_route_map(optimize_route(milestones))
        self.assertEqual(fmap.location, [0.0, 0.0])
        self.assertEqual(_children(fmap, folium.Marker), [])

    def test_empty_route(self):
        fmap = create_route_map(optimize_route([]))
        self.assertIsInstance(fmap, folium.Map)
        self.assertEqual(_children(fmap, folium.Marker), [])


if __name__ == "__main__":
    unittest.main()
