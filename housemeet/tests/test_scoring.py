import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "meet_platform.settings")

import django

django.setup()

from django.test import SimpleTestCase

from housemeet import scoring
from housemeet.domain import House, PlacementResult
from housemeet.tests.factories import make_event, make_student


class PointTableTests(SimpleTestCase):
    def test_individual_and_team_tables(self):
        individual = make_event("e1")
        team = make_event("e2", team=True)
        self.assertEqual([scoring.points_for_place(individual, p) for p in (1, 2, 3, 4)], [5, 3, 1, 0])
        self.assertEqual([scoring.points_for_place(team, p) for p in (1, 2, 3, 6)], [7, 5, 3, 0])


class ScoreEventTests(SimpleTestCase):
    def setUp(self):
        self.students = [
            make_student("a1", house=House.ANKARA),
            make_student("a2", house=House.ANKARA),
            make_student("b1", house=House.BAGDAD),
            make_student("c1", house=House.CAIRO),
        ]

    def test_podium_points(self):
        result = PlacementResult(id="r1", event_id="e1", first=["a1"], second=["b1"], third=["c1"], fourth="a2")
        scores = scoring.score_event(make_event("e1"), result, self.students)
        self.assertEqual(scores["Ankara"].points, 5)
        self.assertEqual(scores["Ankara"].gold, 1)
        self.assertEqual(scores["Bagdad"].points, 3)
        self.assertEqual(scores["Bagdad"].silver, 1)
        self.assertEqual(scores["Cairo"].points, 1)
        self.assertEqual(scores["Cairo"].bronze, 1)

    def test_ties_award_full_points_to_everyone(self):
        result = PlacementResult(id="r1", event_id="e1", first=["a1", "b1"], second=["a2"])
        scores = scoring.score_event(make_event("e1", team=True), result, self.students)
        self.assertEqual(scores["Ankara"].points, 7 + 5)
        self.assertEqual(scores["Ankara"].gold, 1)
        self.assertEqual(scores["Ankara"].silver, 1)
        self.assertEqual(scores["Bagdad"].points, 7)
        self.assertEqual(scores["Bagdad"].gold, 1)
        self.assertNotIn("Cairo", scores)

    def test_unknown_students_are_skipped(self):
        result = PlacementResult(id="r1", event_id="e1", first=["ghost"], second=["c1"])
        with self.assertLogs("housemeet.scoring", level="WARNING"):
            scores = scoring.score_event(make_event("e1"), result, {s.id: s for s in self.students})
        self.assertEqual(list(scores), ["Cairo"])
