from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand

from housemeet.demo import demo_snapshot
from housemeet.serializers import dump_snapshot


class Command(BaseCommand):
    help = "Write the demo meet (three houses, thirty students, three events) as JSON"

    def add_arguments(self, parser):
        parser.add_argument("--output", help="File to write; prints to stdout when omitted")

    def handle(self, *args, **options):
        content = json.dumps(dump_snapshot(demo_snapshot()), indent=2)
        output = options.get("output")
        if not output:
            self.stdout.write(content)
            return
        path = Path(output)
        path.write_text(content, encoding="utf-8")
        self.stdout.write(self.style.SUCCESS(f"Demo snapshot written to {path}."))
