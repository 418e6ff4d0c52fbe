from __future__ import annotations

from django.core.management.base import CommandError

from housemeet.eligibility import validate_registration
from housemeet.serializers import RegistrationDecisionSerializer

from ._base import SnapshotCommand


class Command(SnapshotCommand):
    """Check whether a student may be registered for an event."""

    help = "Run the registration rules for one student and event in a meet snapshot."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("--student", required=True, help="Student id")
        parser.add_argument("--event", required=True, help="Event id")
        parser.add_argument("--year", type=int, help="Competition year used for age groups")

    def handle(self, *args, **options):
        snapshot = self.read_snapshot(options["path"])
        student = snapshot.get_student(options["student"])
        if student is None:
            raise CommandError(f"Student '{options['student']}' not found")
        event = snapshot.get_event(options["event"])
        if event is None:
            raise CommandError(f"Event '{options['event']}' not found")

        decision = validate_registration(student, event, snapshot, year=options.get("year"))
        if options["json"]:
            self.write_json(RegistrationDecisionSerializer(decision).data)
        elif decision.ok:
            self.stdout.write(self.style.SUCCESS(f"{student.full_name} can be registered for {event.name}."))
        elif decision.is_duplicate:
            self.stdout.write(f"{student.full_name} is already registered for {event.name}.")
        else:
            self.stdout.write(self.style.ERROR(f"Rejected ({decision.reason}): {decision.message}"))
