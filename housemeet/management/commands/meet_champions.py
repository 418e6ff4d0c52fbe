from __future__ import annotations

from housemeet.champions import compute_champions
from housemeet.serializers import ChampionsSerializer

from ._base import SnapshotCommand


class Command(SnapshotCommand):
    help = "List repeat individual winners and major game winning houses."

    def add_arguments(self, parser):
        super().add_arguments(parser)
        parser.add_argument("--threshold", type=int, help="Wins needed to count as a champion")

    def handle(self, *args, **options):
        champions = compute_champions(
            self.read_snapshot(options["path"]),
            threshold=options.get("threshold"),
        )
        if options["json"]:
            self.write_json(ChampionsSerializer(champions).data)
            return

        self.stdout.write("Individual champions")
        if not champions.individual:
            self.stdout.write("  none yet")
        for champion in champions.individual:
            self.stdout.write(f"  {champion.full_name} ({champion.house or '-'}): {champion.wins} wins")

        self.stdout.write("Major game winners")
        if not champions.major_events:
            self.stdout.write("  none yet")
        for winner in champions.major_events:
            self.stdout.write(f"  {winner.event_name}: {winner.house or 'Unknown'}")
