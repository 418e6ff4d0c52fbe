import json
import os
import tempfile
from io import StringIO
from pathlib import Path

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "meet_platform.settings")

import django

django.setup()

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase

from housemeet import services
from housemeet.demo import demo_snapshot
from housemeet.serializers import dump_snapshot


class MeetCommandTests(SimpleTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        snapshot = services.submit_result(demo_snapshot(), "e1", first=["s21"], second=["s1"])
        snapshot = services.submit_result(snapshot, "e3", first=["s11"])
        self.path = Path(self.tmp.name) / "meet.json"
        self.path.write_text(json.dumps(dump_snapshot(snapshot)), encoding="utf-8")

    def _call(self, *args, **kwargs):
        out = StringIO()
        call_command(*args, stdout=out, **kwargs)
        return out.getvalue()

    def test_demo_snapshot_to_file(self):
        target = Path(self.tmp.name) / "demo.json"
        output = self._call("meet_demo_snapshot", output=str(target))
        self.assertIn("Demo snapshot written", output)
        payload = json.loads(target.read_text(encoding="utf-8"))
        self.assertEqual(len(payload["students"]), 30)
        self.assertEqual([event["id"] for event in payload["events"]], ["e1", "e2", "e3"])

    def test_standings_json(self):
        data = json.loads(self._call("meet_standings", str(self.path), "--json"))
        self.assertEqual([row["house"] for row in data["ranking"]], ["Bagdad", "Cairo", "Ankara"])
        self.assertEqual(data["ranking"][0]["total"], 7)

    def test_standings_table(self):
        output = self._call("meet_standings", str(self.path))
        self.assertIn("Bagdad", output)
        self.assertIn("Volleyball", output)

    def test_champions(self):
        data = json.loads(self._call("meet_champions", str(self.path), "--json", "--threshold", "1"))
        self.assertEqual([row["student_id"] for row in data["individual"]], ["s21"])
        self.assertEqual(data["major_events"][0]["house"], "Bagdad")

    def test_check_registration(self):
        data = json.loads(
            self._call("meet_check_registration", str(self.path), "--student", "s1", "--event", "e2", "--json")
        )
        self.assertEqual(data["reason"], "ineligible_gender")

        output = self._call("meet_check_registration", str(self.path), "--student", "s2", "--event", "e2")
        self.assertIn("can be registered", output)

    def test_check_registration_for_finished_event(self):
        data = json.loads(
            self._call("meet_check_registration", str(self.path), "--student", "s3", "--event", "e1", "--json")
        )
        self.assertEqual(data["status"], "rejected")
        self.assertEqual(data["reason"], "event_not_open")

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            self._call("meet_standings", str(Path(self.tmp.name) / "missing.json"))

    def test_invalid_payload(self):
        self.path.write_text(json.dumps({"results": [{"id": "r", "event_id": "e1", "first": []}]}))
        with self.assertRaises(CommandError):
            self._call("meet_standings", str(self.path))

    def test_unknown_student(self):
        with self.assertRaises(CommandError):
            self._call("meet_check_registration", str(self.path), "--student", "s99", "--event", "e1")
