"""Champion views derived from finished results."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from django.conf import settings

from .snapshot import MeetSnapshot

DEFAULT_CHAMPION_THRESHOLD = 3


@dataclass(frozen=True)
class IndividualChampion:
    student_id: str
    full_name: str
    house: str | None
    wins: int


@dataclass(frozen=True)
class MajorEventWinner:
    event_id: str
    event_name: str
    student_id: str
    house: str | None


@dataclass(frozen=True)
class Champions:
    individual: list[IndividualChampion]
    major_events: list[MajorEventWinner]


def champion_threshold() -> int:
    return int(getattr(settings, "HOUSEMEET_CHAMPION_THRESHOLD", DEFAULT_CHAMPION_THRESHOLD))


def individual_champions(snapshot: MeetSnapshot, *, threshold: int | None = None) -> list[IndividualChampion]:
    """Students with at least ``threshold`` first places in individual events.

    Every tied first-place student counts as a winner.
    """

    if threshold is None:
        threshold = champion_threshold()
    wins: Counter[str] = Counter()
    for result in snapshot.results:
        event = snapshot.get_event(result.event_id)
        if event is None or event.is_team_event:
            continue
        wins.update(result.first)

    champions = []
    for student_id, count in wins.items():
        if count < threshold:
            continue
        student = snapshot.get_student(student_id)
        champions.append(
            IndividualChampion(
                student_id=student_id,
                full_name=student.full_name if student else "Unknown",
                house=student.house if student else None,
                wins=count,
            )
        )
    champions.sort(key=lambda champion: (-champion.wins, champion.full_name, champion.student_id))
    return champions


def major_event_winners(snapshot: MeetSnapshot) -> list[MajorEventWinner]:
    """The winning house of each completed major game.

    Only the first listed first-place student decides the house, even when the
    first place is tied.
    """

    winners = []
    for event in snapshot.events:
        if not (event.is_major_game and event.is_completed):
            continue
        result = snapshot.result_for_event(event.id)
        if result is None:
            continue
        winners.append(
            MajorEventWinner(
                event_id=event.id,
                event_name=event.name,
                student_id=result.winner_id,
                house=snapshot.house_of(result.winner_id),
            )
        )
    return winners


def compute_champions(snapshot: MeetSnapshot, *, threshold: int | None = None) -> Champions:
    return Champions(
        individual=individual_champions(snapshot, threshold=threshold),
        major_events=major_event_winners(snapshot),
    )
