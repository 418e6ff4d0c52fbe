import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "meet_platform.settings")

import django

django.setup()

from django.test import SimpleTestCase

from housemeet import services
from housemeet.demo import demo_snapshot
from housemeet.domain import ActivityAction, Actor, ActorRole, EventStatus, House
from housemeet.exceptions import (
    ActorNotPermitted,
    EventNotOpen,
    HouseCapacityExceeded,
    InvalidBonusAward,
    InvalidResult,
    UnknownReference,
)


class RegistrationServiceTests(SimpleTestCase):
    def setUp(self):
        self.snapshot = demo_snapshot()
        self.actor = Actor(username="captain.bagdad", role=ActorRole.CAPTAIN, house=House.BAGDAD)

    def test_register_records_activity(self):
        change = services.register_student(self.snapshot, "s11", "e1", actor=self.actor)
        self.assertTrue(change.changed)
        self.assertTrue(change.snapshot.is_registered("s11", "e1"))
        self.assertFalse(self.snapshot.is_registered("s11", "e1"))
        self.assertEqual(change.registration.house, "Bagdad")
        self.assertEqual(change.activity.action, ActivityAction.REGISTERED)
        self.assertEqual(change.activity.actor_role, "CAPTAIN")
        self.assertEqual(change.activity.student_name, "F. Ahmed")
        self.assertEqual(change.activity.event_name, "100m Sprint")

    def test_register_twice_is_a_no_op(self):
        change = services.register_student(self.snapshot, "s11", "e1", actor=self.actor)
        again = services.register_student(change.snapshot, "s11", "e1", actor=self.actor)
        self.assertFalse(again.changed)
        self.assertIs(again.snapshot, change.snapshot)

    def test_house_capacity_is_enforced(self):
        snapshot = self.snapshot
        for student_id in ("s11", "s15"):
            snapshot = services.register_student(snapshot, student_id, "e1", actor=self.actor).snapshot
        with self.assertRaises(HouseCapacityExceeded):
            services.register_student(snapshot, "s19", "e1", actor=self.actor)

    def test_unknown_references(self):
        with self.assertRaises(UnknownReference):
            services.register_student(self.snapshot, "nobody", "e1", actor=self.actor)
        with self.assertRaises(UnknownReference):
            services.register_student(self.snapshot, "s11", "e404", actor=self.actor)

    def test_captain_cannot_manage_other_houses(self):
        with self.assertRaises(ActorNotPermitted) as ctx:
            services.register_student(self.snapshot, "s1", "e1", actor=self.actor)
        self.assertEqual(ctx.exception.code, "actor_not_permitted")

        admin = Actor(username="admin")
        snapshot = services.register_student(self.snapshot, "s1", "e1", actor=admin).snapshot
        with self.assertRaises(ActorNotPermitted):
            services.unregister_student(snapshot, "s1", "e1", actor=self.actor)
        self.assertTrue(services.unregister_student(snapshot, "s1", "e1", actor=admin).changed)

    def test_completed_event_rejects_registration(self):
        snapshot = services.submit_result(self.snapshot, "e1", first=["s1"])
        with self.assertRaises(EventNotOpen):
            services.register_student(snapshot, "s11", "e1", actor=self.actor)

    def test_unregister(self):
        snapshot = services.register_student(self.snapshot, "s11", "e1", actor=self.actor).snapshot
        change = services.unregister_student(snapshot, "s11", "e1", actor=self.actor)
        self.assertFalse(change.snapshot.is_registered("s11", "e1"))
        self.assertEqual(change.activity.action, ActivityAction.REMOVED)

        orphan = services.unregister_student(snapshot.without_event("e1"), "s11", "e1", actor=self.actor)
        self.assertFalse(orphan.snapshot.is_registered("s11", "e1"))
        self.assertIsNone(orphan.activity)


class ResultServiceTests(SimpleTestCase):
    def setUp(self):
        self.snapshot = demo_snapshot()

    def test_submit_marks_event_completed(self):
        snapshot = services.submit_result(self.snapshot, "e1", first=["s1"], second=["s11"], remarks="Wind +1.2")
        self.assertEqual(snapshot.get_event("e1").status, EventStatus.COMPLETED)
        self.assertEqual(snapshot.result_for_event("e1").remarks, "Wind +1.2")
        self.assertEqual(self.snapshot.get_event("e1").status, EventStatus.OPEN)

    def test_empty_first_place_is_rejected(self):
        with self.assertRaises(InvalidResult):
            services.submit_result(self.snapshot, "e1", first=[])
        self.assertEqual(self.snapshot.get_event("e1").status, EventStatus.OPEN)
        self.assertEqual(self.snapshot.results, ())

    def test_single_student_id_is_accepted(self):
        snapshot = services.submit_result(self.snapshot, "e1", first="s21")
        self.assertEqual(snapshot.result_for_event("e1").first, ("s21",))

    def test_resubmission_keeps_result_id(self):
        snapshot = services.submit_result(self.snapshot, "e1", first=["s1"], result_id="r-e1")
        snapshot = services.submit_result(snapshot, "e1", first=["s3"])
        self.assertEqual(len(snapshot.results), 1)
        self.assertEqual(snapshot.results[0].id, "r-e1")
        self.assertEqual(snapshot.results[0].first, ("s3",))

    def test_team_events_drop_lower_places(self):
        snapshot = services.submit_result(self.snapshot, "e2", first=["s2"], fourth="s20")
        self.assertIsNone(snapshot.result_for_event("e2").fourth)

    def test_unknown_event(self):
        with self.assertRaises(UnknownReference):
            services.submit_result(self.snapshot, "e404", first=["s1"])


class BonusServiceTests(SimpleTestCase):
    def test_add_update_and_remove(self):
        snapshot = services.submit_bonus_award(
            demo_snapshot(), house=House.CAIRO, points=4, description=" Best march past ", award_id="b1"
        )
        self.assertEqual(snapshot.bonus_awards[0].description, "Best march past")

        snapshot = services.submit_bonus_award(
            snapshot, house=House.CAIRO, points=6, description="Best march past", award_id="b1"
        )
        self.assertEqual(len(snapshot.bonus_awards), 1)
        self.assertEqual(snapshot.bonus_awards[0].points, 6)

        snapshot = services.remove_bonus_award(snapshot, "b1")
        self.assertEqual(snapshot.bonus_awards, ())

    def test_invalid_award(self):
        with self.assertRaises(InvalidBonusAward):
            services.submit_bonus_award(demo_snapshot(), house=House.CAIRO, points=12, description="Too much")
