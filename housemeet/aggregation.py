"""House standings, medal tally and the cumulative points timeline."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone

from .domain import HOUSE_COLOURS, HOUSE_ORDER, House, HouseStanding
from .scoring import score_event
from .snapshot import MeetSnapshot

logger = logging.getLogger(__name__)

__all__ = [
    "BONUS_TIMELINE_LABEL",
    "START_TIMELINE_LABEL",
    "Standings",
    "TimelinePoint",
    "compute_standings",
    "ranking_key",
]

START_TIMELINE_LABEL = "Start"
BONUS_TIMELINE_LABEL = "Special Points Awarded"

@dataclass(frozen=True)
class TimelinePoint:
    """Cumulative house totals after one step of the meet."""

    START = "start"
    EVENT = "event"
    BONUS = "bonus"

    label: str
    kind: str
    totals: dict[str, int]
    event_id: str | None = None
    schedule: datetime | None = None


@dataclass(frozen=True)
class Standings:
    """Everything derived from results and bonus awards."""

    houses: dict[str, HouseStanding]
    ranking: list[HouseStanding]
    timeline: list[TimelinePoint]

    @property
    def totals(self) -> dict[str, int]:
        return {house: standing.total for house, standing in self.houses.items()}

    @property
    def leader(self) -> HouseStanding | None:
        return self.ranking[0] if self.ranking else None


def ranking_key(standing: HouseStanding) -> tuple:
    """Total first, then gold, silver and bronze, then the fixed house order."""

    return (
        -standing.total,
        -standing.gold,
        -standing.silver,
        -standing.bronze,
        HOUSE_ORDER.get(standing.house, len(HOUSE_ORDER)),
        standing.house,
    )


def _schedule_key(schedule: datetime | None) -> tuple:
    """Unscheduled events sort before every scheduled one."""

    if schedule is None:
        return (False, None)
    if schedule.tzinfo is None:
        schedule = schedule.replace(tzinfo=timezone.utc)
    return (True, schedule)


def _zeroed() -> dict[str, int]:
    return {house: 0 for house in House.values}


def compute_standings(snapshot: MeetSnapshot) -> Standings:
    """Fold every result and bonus award into house standings.

    The fold is pure: the same snapshot always yields the same standings, and
    the order of results or awards inside the snapshot does not affect totals.
    """

    students = {student.id: student for student in snapshot.students}
    points: dict[str, int] = defaultdict(int)
    medals: dict[str, dict[str, int]] = defaultdict(lambda: {"gold": 0, "silver": 0, "bronze": 0})
    bonus: dict[str, int] = defaultdict(int)
    steps: list[tuple[tuple, str, str, datetime | None, dict[str, int]]] = []

    for result in snapshot.results:
        event = snapshot.get_event(result.event_id)
        if event is None:
            logger.debug("Ignoring result %s for missing event %s", result.id, result.event_id)
            continue
        deltas = score_event(event, result, students)
        event_points = _zeroed()
        for house, score in deltas.items():
            points[house] += score.points
            event_points[house] = event_points.get(house, 0) + score.points
            medals[house]["gold"] += score.gold
            medals[house]["silver"] += score.silver
            medals[house]["bronze"] += score.bronze
        steps.append((_schedule_key(event.schedule), event.id, event.name, event.schedule, event_points))

    for award in snapshot.bonus_awards:
        bonus[award.house] += award.points

    houses: dict[str, HouseStanding] = {}
    for house in [*House.values, *sorted(set(points) - set(House.values))]:
        tally = medals.get(house, {})
        houses[house] = HouseStanding(
            house=house,
            gold=tally.get("gold", 0),
            silver=tally.get("silver", 0),
            bronze=tally.get("bronze", 0),
            bonus=bonus.get(house, 0),
            total=points.get(house, 0) + bonus.get(house, 0),
            colour=HOUSE_COLOURS.get(house, ""),
        )

    ranking = sorted(houses.values(), key=ranking_key)
    timeline = _build_timeline(steps, bonus, snapshot)
    return Standings(houses=houses, ranking=ranking, timeline=timeline)


def _build_timeline(steps, bonus: dict[str, int], snapshot: MeetSnapshot) -> list[TimelinePoint]:
    running = _zeroed()
    timeline = [TimelinePoint(label=START_TIMELINE_LABEL, kind=TimelinePoint.START, totals=dict(running))]

    for _, event_id, name, schedule, event_points in sorted(steps, key=lambda step: (step[0], step[1])):
        for house, value in event_points.items():
            running[house] = running.get(house, 0) + value
        timeline.append(
            TimelinePoint(
                label=name,
                kind=TimelinePoint.EVENT,
                totals=dict(running),
                event_id=event_id,
                schedule=schedule,
            )
        )

    if snapshot.bonus_awards:
        for house, value in bonus.items():
            running[house] = running.get(house, 0) + value
        timeline.append(
            TimelinePoint(label=BONUS_TIMELINE_LABEL, kind=TimelinePoint.BONUS, totals=dict(running))
        )
    return timeline
