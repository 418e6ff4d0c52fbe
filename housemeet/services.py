"""Submission entry points for registrations, results and bonus awards.

Each function validates its input against a snapshot and returns a new
snapshot for the owning store to persist. Nothing here keeps state between
calls.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Iterable

from django.utils import timezone

from .domain import (
    ActivityAction,
    ActivityEntry,
    Actor,
    ActorRole,
    BonusAward,
    Event,
    PlacementResult,
    Registration,
    Student,
)
from .eligibility import check_registration
from .exceptions import ActorNotPermitted, UnknownReference
from .snapshot import MeetSnapshot

logger = logging.getLogger(__name__)

__all__ = [
    "RegistrationChange",
    "build_activity_entry",
    "register_student",
    "unregister_student",
    "submit_result",
    "submit_bonus_award",
    "remove_bonus_award",
]


@dataclass(frozen=True)
class RegistrationChange:
    """Snapshot after a registration change plus the audit entry to store.

    ``activity`` is ``None`` when nothing changed.
    """

    snapshot: MeetSnapshot
    registration: Registration | None = None
    activity: ActivityEntry | None = None

    @property
    def changed(self) -> bool:
        return self.activity is not None


def _new_id() -> str:
    return uuid.uuid4().hex


def _require_student(snapshot: MeetSnapshot, student_id: str) -> Student:
    student = snapshot.get_student(student_id)
    if student is None:
        raise UnknownReference(f"Student '{student_id}' was not found.")
    return student


def _require_event(snapshot: MeetSnapshot, event_id: str) -> Event:
    event = snapshot.get_event(event_id)
    if event is None:
        raise UnknownReference(f"Event '{event_id}' was not found.")
    return event


def _check_actor(actor: Actor, student: Student) -> None:
    """House captains may only manage students of their own house."""

    if actor.role == ActorRole.CAPTAIN and actor.house != student.house:
        raise ActorNotPermitted(
            f"{actor.username} captains {actor.house or 'no house'} and cannot manage "
            f"{student.full_name} of {student.house}."
        )


def build_activity_entry(action: str, student: Student, event: Event, actor: Actor) -> ActivityEntry:
    """Audit entry for a registration change, snapshotting names at this moment."""

    return ActivityEntry(
        timestamp=timezone.now(),
        actor_username=actor.username,
        actor_role=str(actor.role),
        student_id=student.id,
        student_name=student.full_name,
        admission_no=student.admission_no,
        event_id=event.id,
        event_name=event.name,
        action=str(action),
        house=student.house,
    )


def register_student(
    snapshot: MeetSnapshot,
    student_id: str,
    event_id: str,
    *,
    actor: Actor,
    registration_id: str | None = None,
    year: int | None = None,
) -> RegistrationChange:
    """Register a student for an event.

    Raises a :class:`~housemeet.exceptions.RegistrationRejected` subclass when
    the registration breaks an eligibility rule and
    :class:`~housemeet.exceptions.ActorNotPermitted` when a captain acts on a
    student from another house. Registering twice is a no-op.
    """

    student = _require_student(snapshot, student_id)
    event = _require_event(snapshot, event_id)

    _check_actor(actor, student)
    is_new = check_registration(student, event, snapshot, year=year)
    if not is_new:
        return RegistrationChange(snapshot=snapshot)

    registration = Registration(
        id=registration_id or _new_id(),
        event_id=event.id,
        student_id=student.id,
        house=student.house,
    )
    logger.info("Registered %s (%s) for %s", student.id, student.house, event.id)
    return RegistrationChange(
        snapshot=snapshot.with_registration(registration),
        registration=registration,
        activity=build_activity_entry(ActivityAction.REGISTERED, student, event, actor),
    )


def unregister_student(
    snapshot: MeetSnapshot,
    student_id: str,
    event_id: str,
    *,
    actor: Actor,
) -> RegistrationChange:
    """Remove a registration.

    Eligibility rules do not apply, but a captain may only remove students of
    their own house. No audit entry is produced when the student or event no
    longer exists.
    """

    student = snapshot.get_student(student_id)
    if student is not None:
        _check_actor(actor, student)
    updated = snapshot.without_registration(student_id, event_id)
    event = snapshot.get_event(event_id)
    if student is None or event is None:
        return RegistrationChange(snapshot=updated)

    logger.info("Removed %s from %s", student_id, event_id)
    return RegistrationChange(
        snapshot=updated,
        activity=build_activity_entry(ActivityAction.REMOVED, student, event, actor),
    )


def submit_result(
    snapshot: MeetSnapshot,
    event_id: str,
    *,
    first: Iterable[str],
    second: Iterable[str] = (),
    third: Iterable[str] = (),
    fourth: str | None = None,
    fifth: str | None = None,
    sixth: str | None = None,
    remarks: str = "",
    result_id: str | None = None,
) -> MeetSnapshot:
    """Record or replace the result of an event and mark it completed.

    Raises :class:`~housemeet.exceptions.InvalidResult` when the first place is
    empty or a student appears in more than one place; the snapshot is left
    untouched and the event keeps its status.
    """

    event = snapshot.get_event(event_id)
    if event is None:
        raise UnknownReference(f"Event '{event_id}' was not found.")

    if event.is_team_event and any((fourth, fifth, sixth)):
        logger.info("Dropping places 4-6 for team event %s", event_id)
        fourth = fifth = sixth = None

    existing = snapshot.result_for_event(event_id)
    result = PlacementResult(
        id=result_id or (existing.id if existing else _new_id()),
        event_id=event_id,
        first=first,
        second=second,
        third=third,
        fourth=fourth,
        fifth=fifth,
        sixth=sixth,
        remarks=remarks or "",
    )
    return snapshot.with_result(result)


def submit_bonus_award(
    snapshot: MeetSnapshot,
    *,
    house: str,
    points: int,
    description: str,
    student_id: str | None = None,
    award_id: str | None = None,
) -> MeetSnapshot:
    """Add or update a bonus award. Invalid awards raise :class:`InvalidBonusAward`."""

    award = BonusAward(
        id=award_id or _new_id(),
        house=house,
        points=points,
        description=(description or "").strip(),
        student_id=student_id or None,
    )
    if award.student_id and snapshot.get_student(award.student_id) is None:
        logger.warning("Bonus award %s credits unknown student %s", award.id, award.student_id)
    return snapshot.with_bonus_award(award)


def remove_bonus_award(snapshot: MeetSnapshot, award_id: str) -> MeetSnapshot:
    return snapshot.without_bonus_award(award_id)
