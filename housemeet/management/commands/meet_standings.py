from __future__ import annotations

from housemeet.aggregation import compute_standings
from housemeet.serializers import StandingsSerializer

from ._base import SnapshotCommand


class Command(SnapshotCommand):
    """Print the house ranking, medal tally and points timeline."""

    help = "Compute house standings from a meet snapshot JSON file."

    def handle(self, *args, **options):
        standings = compute_standings(self.read_snapshot(options["path"]))
        if options["json"]:
            self.write_json(StandingsSerializer(standings).data)
            return

        self.stdout.write("Rank  House       Gold  Silver  Bronze  Special  Total")
        for position, row in enumerate(standings.ranking, start=1):
            self.stdout.write(
                f"{position:<5} {row.house:<11} {row.gold:>4}  {row.silver:>6}  "
                f"{row.bronze:>6}  {row.bonus:>7}  {row.total:>5}"
            )

        self.stdout.write("")
        self.stdout.write("Timeline")
        for point in standings.timeline:
            totals = ", ".join(f"{house} {value}" for house, value in point.totals.items())
            self.stdout.write(f"  {point.label}: {totals}")
