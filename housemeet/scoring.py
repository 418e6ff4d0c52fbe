"""Placement scoring for finished events."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from .domain import Event, PlacementResult, Student

logger = logging.getLogger(__name__)


INDIVIDUAL_POINTS = (5, 3, 1)
TEAM_POINTS = (7, 5, 3)

MEDAL_FOR_PLACE = {1: "gold", 2: "silver", 3: "bronze"}


@dataclass
class EventScore:
    """Points and medals one house earned from a single event."""

    points: int = 0
    gold: int = 0
    silver: int = 0
    bronze: int = 0

    def add_place(self, place: int, points: int) -> None:
        self.points += points
        medal = MEDAL_FOR_PLACE[place]
        setattr(self, medal, getattr(self, medal) + 1)


def point_table(event: Event) -> tuple[int, int, int]:
    return TEAM_POINTS if event.is_team_event else INDIVIDUAL_POINTS


def points_for_place(event: Event, place: int) -> int:
    """Points for a podium place; places outside the podium score nothing."""

    table = point_table(event)
    if 1 <= place <= len(table):
        return table[place - 1]
    return 0


def score_event(
    event: Event,
    result: PlacementResult,
    students: Mapping[str, Student] | Iterable[Student],
) -> dict[str, EventScore]:
    """Return the points and medals each house earned from ``result``.

    Every student listed at a place, tied or not, earns the full value of that
    place and one medal for their house. Houses are resolved from the current
    roster; students missing from it are skipped.
    """

    if not isinstance(students, Mapping):
        students = {student.id: student for student in students}

    scores: dict[str, EventScore] = {}
    for place, student_ids in result.podium():
        value = points_for_place(event, place)
        for student_id in student_ids:
            student = students.get(student_id)
            if student is None:
                logger.warning(
                    "Skipping unknown student %s placed %d in event %s", student_id, place, event.id
                )
                continue
            scores.setdefault(student.house, EventScore()).add_place(place, value)
    return scores
