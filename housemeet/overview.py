"""Read-only summaries used by dashboards and reports."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .domain import Actor, ActorRole, Event, PlacementResult, Student
from .eligibility import competition_age
from .snapshot import MeetSnapshot


@dataclass(frozen=True)
class MeetSummary:
    total_students: int
    total_events: int
    completed_events: int
    registrations: int
    house_students: int


@dataclass(frozen=True)
class RecentResult:
    event_id: str
    event_name: str
    winner_id: str
    winner_name: str
    winner_house: str | None


@dataclass(frozen=True)
class BonusLine:
    """One special-points award as shown in the report."""

    award_id: str
    house: str
    points: int
    description: str
    student_name: str | None


@dataclass(frozen=True)
class ResultLine:
    """Display strings for each place of one result."""

    event_id: str
    event_label: str
    places: list[str]
    remarks: str


def meet_summary(snapshot: MeetSnapshot, house: str | None = None) -> MeetSummary:
    """Headline counts. ``house`` narrows the student count for a captain."""

    return MeetSummary(
        total_students=len(snapshot.students),
        total_events=len(snapshot.events),
        completed_events=len(snapshot.results),
        registrations=len(snapshot.registrations),
        house_students=len(snapshot.students_in_house(house)) if house else len(snapshot.students),
    )


def recent_results(snapshot: MeetSnapshot, limit: int = 5) -> list[RecentResult]:
    """Most recently submitted results first."""

    rows: list[RecentResult] = []
    for result in reversed(snapshot.results):
        event = snapshot.get_event(result.event_id)
        winner = snapshot.get_student(result.winner_id)
        rows.append(
            RecentResult(
                event_id=result.event_id,
                event_name=event.name if event else "Unknown Event",
                winner_id=result.winner_id,
                winner_name=winner.full_name if winner else "Unknown",
                winner_house=winner.house if winner else None,
            )
        )
        if len(rows) >= limit:
            break
    return rows


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def scheduled_events(snapshot: MeetSnapshot) -> list[Event]:
    events = [event for event in snapshot.events if event.schedule]
    return sorted(events, key=lambda event: (_aware(event.schedule), event.id))


def unscheduled_events(snapshot: MeetSnapshot) -> list[Event]:
    return [event for event in snapshot.events if not event.schedule]


def upcoming_events(snapshot: MeetSnapshot, limit: int = 5) -> list[Event]:
    return [event for event in scheduled_events(snapshot) if not event.is_completed][:limit]


def pending_events(snapshot: MeetSnapshot, actor: Actor | None = None) -> list[Event]:
    """Events still waiting for a result.

    Judges only see the events assigned to them through ``Event.judge_id``,
    which holds the judge's username.
    """

    events = [event for event in snapshot.events if not event.is_completed]
    if actor is not None and actor.role == ActorRole.JUDGE:
        events = [event for event in events if event.judge_id == actor.username]
    return events


def _describe(snapshot: MeetSnapshot, student_ids: tuple[str, ...]) -> str:
    if not student_ids:
        return "N/A"
    names = []
    for student_id in student_ids:
        student = snapshot.get_student(student_id)
        names.append(f"{student.full_name} ({student.house})" if student else "Unknown")
    return ", ".join(names)


def result_lines(snapshot: MeetSnapshot) -> list[ResultLine]:
    """Per-result place descriptions for the results report.

    Places four to six are left blank when nobody was recorded there.
    """

    lines = []
    for result in snapshot.results:
        event = snapshot.get_event(result.event_id)
        lines.append(
            ResultLine(
                event_id=result.event_id,
                event_label=event.label() if event else "Unknown Event",
                places=_place_strings(snapshot, result),
                remarks=result.remarks,
            )
        )
    return lines


def _place_strings(snapshot: MeetSnapshot, result: PlacementResult) -> list[str]:
    strings = []
    for place, student_ids in result.places():
        if place > 3 and not student_ids:
            strings.append("")
        else:
            strings.append(_describe(snapshot, student_ids))
    return strings


def bonus_lines(snapshot: MeetSnapshot) -> list[BonusLine]:
    """Special-points breakdown in award order.

    ``student_name`` is ``None`` for unattributed awards and ``"Unknown"`` when
    the attributed student no longer exists.
    """

    lines = []
    for award in snapshot.bonus_awards:
        name = None
        if award.student_id:
            student = snapshot.get_student(award.student_id)
            name = student.full_name if student else "Unknown"
        lines.append(
            BonusLine(
                award_id=award.id,
                house=award.house,
                points=award.points,
                description=award.description,
                student_name=name,
            )
        )
    return lines


def student_age(student: Student, year: int | None = None) -> int:
    return competition_age(student, year)
