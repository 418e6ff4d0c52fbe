from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from rest_framework import serializers

from housemeet.serializers import load_snapshot
from housemeet.snapshot import MeetSnapshot


class SnapshotCommand(BaseCommand):
    """Base for commands that read a meet snapshot from a JSON file."""

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the meet snapshot JSON file")
        parser.add_argument("--json", action="store_true", help="Print machine readable JSON")

    def read_snapshot(self, path: str) -> MeetSnapshot:
        snapshot_path = Path(path)
        if not snapshot_path.exists():
            raise CommandError(f"Snapshot file '{snapshot_path}' does not exist")
        try:
            with snapshot_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise CommandError(f"Snapshot file '{snapshot_path}' is not valid JSON: {exc}") from exc
        try:
            return load_snapshot(payload)
        except serializers.ValidationError as exc:
            raise CommandError(f"Invalid snapshot: {json.dumps(exc.detail)}") from exc

    def write_json(self, data) -> None:
        self.stdout.write(json.dumps(data, indent=2))
