"""Registration eligibility rules.

Checks run in a fixed order and the first failure wins:

1. event open for registration
2. gender category
3. age group
4. individual-event cap per student
5. per-house capacity for the event
6. duplicate registration (a no-op, not an error)
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from django.conf import settings

from .domain import Event, EventStatus, Gender, GenderCategory, Registration, Student
from .exceptions import (
    EventNotOpen,
    HouseCapacityExceeded,
    IneligibleAge,
    IneligibleGender,
    RegistrationRejected,
    StudentEventCapExceeded,
)
from .snapshot import MeetSnapshot

logger = logging.getLogger(__name__)

__all__ = [
    "AGE_GROUPS",
    "MAX_INDIVIDUAL_EVENTS",
    "INDIVIDUAL_HOUSE_CAPACITY",
    "TEAM_HOUSE_CAPACITY",
    "RegistrationDecision",
    "age_range_for",
    "competition_age",
    "competition_year",
    "house_capacity",
    "check_registration",
    "validate_registration",
]

DEFAULT_COMPETITION_YEAR = 2026

MAX_INDIVIDUAL_EVENTS = 3
INDIVIDUAL_HOUSE_CAPACITY = 2
TEAM_HOUSE_CAPACITY = 25

# Inclusive (minimum, maximum) competition ages. ``None`` leaves that side open.
AGE_GROUPS: dict[str, tuple[int | None, int | None]] = {
    "under 12": (10, 11),
    "under 14": (12, 13),
    "under 15": (10, 14),
    "under 16": (14, 15),
    "under 18": (16, 17),
    "under 20": (18, 19),
    "over 15": (16, None),
    "open": (None, None),
}

_GENDER_FOR_CATEGORY = {
    GenderCategory.BOYS.value: Gender.MALE.value,
    GenderCategory.GIRLS.value: Gender.FEMALE.value,
}


def _normalise_label(label: str) -> str:
    return re.sub(r"\s+", " ", (label or "").strip()).lower()


def competition_year() -> int:
    return int(getattr(settings, "HOUSEMEET_COMPETITION_YEAR", DEFAULT_COMPETITION_YEAR))


def competition_age(student: Student, year: int | None = None) -> int:
    """Age used for age groups: the competition year minus the birth year."""

    return (year or competition_year()) - student.birth_year


def age_range_for(age_group: str) -> tuple[int | None, int | None]:
    """Return the inclusive age range for an age-group label."""

    key = _normalise_label(age_group)
    if key in AGE_GROUPS:
        return AGE_GROUPS[key]
    logger.warning("Unknown age group %r; treating it as open", age_group)
    return (None, None)


def house_capacity(event: Event) -> int:
    return TEAM_HOUSE_CAPACITY if event.is_team_event else INDIVIDUAL_HOUSE_CAPACITY


def _check_open(event: Event) -> None:
    if event.status != EventStatus.OPEN:
        raise EventNotOpen(
            f"{event.name} is {event.status.lower()} and no longer accepts registrations."
        )


def _check_gender(student: Student, event: Event) -> None:
    required = _GENDER_FOR_CATEGORY.get(event.gender_category)
    if required and student.gender != required:
        raise IneligibleGender(
            f"{student.full_name} cannot enter {event.name}: the event is for "
            f"{event.gender_category.lower()} only."
        )


def _check_age(student: Student, event: Event, year: int | None) -> None:
    minimum, maximum = age_range_for(event.age_group)
    age = competition_age(student, year)
    if minimum is not None and age < minimum:
        raise IneligibleAge(
            f"{student.full_name} (age {age}) is too young for the {event.age_group} group."
        )
    if maximum is not None and age > maximum:
        raise IneligibleAge(
            f"{student.full_name} (age {age}) is too old for the {event.age_group} group."
        )


def _check_individual_cap(
    student: Student,
    event: Event,
    registrations: list[Registration],
    events_by_id: dict[str, Event],
) -> None:
    if event.is_team_event:
        return
    count = 0
    for reg in registrations:
        if reg.student_id != student.id or reg.event_id == event.id:
            continue
        other = events_by_id.get(reg.event_id)
        # Registrations for deleted events are ignored.
        if other is not None and not other.is_team_event:
            count += 1
    if count >= MAX_INDIVIDUAL_EVENTS:
        raise StudentEventCapExceeded(
            f"{student.full_name} has already registered for the maximum of "
            f"{MAX_INDIVIDUAL_EVENTS} individual events."
        )


def _check_house_capacity(student: Student, event: Event, registrations: list[Registration]) -> None:
    limit = house_capacity(event)
    count = sum(
        1
        for reg in registrations
        if reg.event_id == event.id and reg.house == student.house and reg.student_id != student.id
    )
    if count >= limit:
        kind = "team" if event.is_team_event else "individual"
        raise HouseCapacityExceeded(
            f"House limit reached! {student.house} can only register {limit} students "
            f"for this {kind} event."
        )


@dataclass(frozen=True)
class RegistrationDecision:
    """Outcome of a registration attempt."""

    OK = "ok"
    DUPLICATE = "duplicate"
    REJECTED = "rejected"

    status: str
    error: RegistrationRejected | None = None

    @property
    def ok(self) -> bool:
        return self.status == self.OK

    @property
    def is_duplicate(self) -> bool:
        return self.status == self.DUPLICATE

    @property
    def reason(self) -> str | None:
        return self.error.code if self.error else None

    @property
    def message(self) -> str | None:
        return self.error.messages[0] if self.error else None


def check_registration(
    student: Student,
    event: Event,
    snapshot: MeetSnapshot,
    *,
    year: int | None = None,
) -> bool:
    """Raise a :class:`RegistrationRejected` subclass when the entry is illegal.

    ``snapshot`` supplies the current registrations and the event catalogue
    used to tell individual registrations from team ones. Returns ``False``
    when the student is already registered for the event and ``True`` when a
    new registration should be stored.
    """

    registrations = list(snapshot.registrations)
    events_by_id = {item.id: item for item in snapshot.events}
    events_by_id.setdefault(event.id, event)

    _check_open(event)
    _check_gender(student, event)
    _check_age(student, event, year)
    _check_individual_cap(student, event, registrations, events_by_id)
    _check_house_capacity(student, event, registrations)

    return not any(reg.student_id == student.id and reg.event_id == event.id for reg in registrations)


def validate_registration(
    student: Student,
    event: Event,
    snapshot: MeetSnapshot,
    *,
    year: int | None = None,
) -> RegistrationDecision:
    """Non-raising wrapper around :func:`check_registration`."""

    try:
        is_new = check_registration(student, event, snapshot, year=year)
    except RegistrationRejected as exc:
        logger.info(
            "Registration of %s for %s rejected: %s", student.id, event.id, exc.code
        )
        return RegistrationDecision(status=RegistrationDecision.REJECTED, error=exc)
    if not is_new:
        return RegistrationDecision(status=RegistrationDecision.DUPLICATE)
    return RegistrationDecision(status=RegistrationDecision.OK)
