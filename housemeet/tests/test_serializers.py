import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "meet_platform.settings")

import django

django.setup()

from django.test import SimpleTestCase
from rest_framework import serializers as drf_serializers

from housemeet import aggregation, services
from housemeet.demo import demo_snapshot
from housemeet.eligibility import validate_registration
from housemeet.serializers import (
    RegistrationDecisionSerializer,
    StandingsSerializer,
    dump_snapshot,
    load_snapshot,
)


class SnapshotSerializerTests(SimpleTestCase):
    def test_demo_snapshot_survives_dump_and_load(self):
        snapshot = services.submit_result(demo_snapshot(), "e1", first=["s1"], second=["s11"], fourth="s21")
        snapshot = services.submit_bonus_award(
            snapshot, house="Cairo", points=3, description="Cleanest camp", award_id="b1"
        )
        self.assertEqual(load_snapshot(dump_snapshot(snapshot)), snapshot)

    def test_missing_collections_default_to_empty(self):
        snapshot = load_snapshot({})
        self.assertEqual(snapshot.students, ())
        self.assertEqual(snapshot.results, ())

    def test_empty_first_place_is_a_field_error(self):
        payload = {"results": [{"id": "r1", "event_id": "e1", "first": []}]}
        with self.assertRaises(drf_serializers.ValidationError) as ctx:
            load_snapshot(payload)
        self.assertIn("results", ctx.exception.detail)

    def test_bonus_points_range_is_a_field_error(self):
        payload = {"bonus_awards": [{"id": "b1", "house": "Ankara", "points": 20, "description": "Flags"}]}
        with self.assertRaises(drf_serializers.ValidationError) as ctx:
            load_snapshot(payload)
        self.assertIn("bonus_awards", ctx.exception.detail)

    def test_two_results_for_one_event_are_rejected(self):
        payload = {
            "results": [
                {"id": "r1", "event_id": "e1", "first": ["s1"]},
                {"id": "r2", "event_id": "e1", "first": ["s1"]},
            ]
        }
        with self.assertRaises(drf_serializers.ValidationError) as ctx:
            load_snapshot(payload)
        self.assertIn("results", ctx.exception.detail)

    def test_repeated_registration_is_rejected(self):
        registration = {"event_id": "e1", "student_id": "s1", "house": "Ankara"}
        payload = {
            "registrations": [
                {"id": "r1", **registration},
                {"id": "r2", **registration},
            ]
        }
        with self.assertRaises(drf_serializers.ValidationError) as ctx:
            load_snapshot(payload)
        self.assertIn("registrations", ctx.exception.detail)

    def test_unknown_house_is_rejected(self):
        payload = {
            "registrations": [{"id": "r1", "event_id": "e1", "student_id": "s1", "house": "Damascus"}]
        }
        with self.assertRaises(drf_serializers.ValidationError):
            load_snapshot(payload)


class OutputSerializerTests(SimpleTestCase):
    def test_standings_payload(self):
        snapshot = services.submit_result(demo_snapshot(), "e1", first=["s1"])
        data = StandingsSerializer(aggregation.compute_standings(snapshot)).data
        self.assertEqual(data["ranking"][0]["house"], "Ankara")
        self.assertEqual(data["ranking"][0]["total"], 5)
        self.assertEqual(data["timeline"][0]["label"], "Start")
        self.assertEqual(data["timeline"][1]["totals"]["Ankara"], 5)
        self.assertEqual(data["timeline"][1]["event_id"], "e1")

    def test_registration_decision_payload(self):
        snapshot = demo_snapshot()
        decision = validate_registration(snapshot.get_student("s2"), snapshot.get_event("e1"), snapshot)
        data = RegistrationDecisionSerializer(decision).data
        self.assertEqual(data["status"], "rejected")
        self.assertEqual(data["reason"], "ineligible_gender")
