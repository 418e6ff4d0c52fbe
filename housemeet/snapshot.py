"""Immutable views of the meet that every engine function reads from."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .domain import (
    BonusAward,
    Event,
    EventStatus,
    PlacementResult,
    Registration,
    Student,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeetSnapshot:
    """A consistent, read-only copy of every collection the engine consumes.

    Mutating helpers return a new snapshot and leave the original untouched.
    """

    students: tuple[Student, ...] = ()
    events: tuple[Event, ...] = ()
    registrations: tuple[Registration, ...] = ()
    results: tuple[PlacementResult, ...] = ()
    bonus_awards: tuple[BonusAward, ...] = ()

    def __post_init__(self) -> None:
        for name in ("students", "events", "registrations", "results", "bonus_awards"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @classmethod
    def empty(cls) -> "MeetSnapshot":
        return cls()

    # Lookups. Deleted events leave registrations and results behind, so every
    # lookup returns None instead of raising.

    def get_student(self, student_id: str | None) -> Student | None:
        if not student_id:
            return None
        return next((student for student in self.students if student.id == student_id), None)

    def get_event(self, event_id: str | None) -> Event | None:
        if not event_id:
            return None
        return next((event for event in self.events if event.id == event_id), None)

    def result_for_event(self, event_id: str) -> PlacementResult | None:
        return next((result for result in self.results if result.event_id == event_id), None)

    def house_of(self, student_id: str) -> str | None:
        student = self.get_student(student_id)
        return student.house if student else None

    def registrations_for_event(self, event_id: str) -> list[Registration]:
        return [reg for reg in self.registrations if reg.event_id == event_id]

    def registrations_for_student(self, student_id: str) -> list[Registration]:
        return [reg for reg in self.registrations if reg.student_id == student_id]

    def is_registered(self, student_id: str, event_id: str) -> bool:
        return any(
            reg.student_id == student_id and reg.event_id == event_id for reg in self.registrations
        )

    def students_in_house(self, house: str) -> list[Student]:
        return [student for student in self.students if student.house == house]

    # Copy-on-write helpers used by the submission services.

    def with_registration(self, registration: Registration) -> "MeetSnapshot":
        if self.is_registered(registration.student_id, registration.event_id):
            return self
        return replace(self, registrations=self.registrations + (registration,))

    def without_registration(self, student_id: str, event_id: str) -> "MeetSnapshot":
        remaining = tuple(
            reg
            for reg in self.registrations
            if not (reg.student_id == student_id and reg.event_id == event_id)
        )
        return replace(self, registrations=remaining)

    def with_result(self, result: PlacementResult) -> "MeetSnapshot":
        """Store ``result`` for its event and mark the event completed.

        An existing result for the same event is replaced in place.
        """

        results = list(self.results)
        for index, existing in enumerate(results):
            if existing.event_id == result.event_id:
                logger.info("Replacing result %s for event %s", existing.id, result.event_id)
                results[index] = result
                break
        else:
            results.append(result)

        events = tuple(
            replace(event, status=EventStatus.COMPLETED) if event.id == result.event_id else event
            for event in self.events
        )
        return replace(self, events=events, results=tuple(results))

    def with_bonus_award(self, award: BonusAward) -> "MeetSnapshot":
        if any(existing.id == award.id for existing in self.bonus_awards):
            updated = tuple(
                award if existing.id == award.id else existing for existing in self.bonus_awards
            )
            return replace(self, bonus_awards=updated)
        return replace(self, bonus_awards=self.bonus_awards + (award,))

    def without_bonus_award(self, award_id: str) -> "MeetSnapshot":
        return replace(
            self,
            bonus_awards=tuple(award for award in self.bonus_awards if award.id != award_id),
        )

    def with_event(self, event: Event) -> "MeetSnapshot":
        if self.get_event(event.id) is None:
            return replace(self, events=self.events + (event,))
        return replace(
            self,
            events=tuple(event if existing.id == event.id else existing for existing in self.events),
        )

    def without_event(self, event_id: str) -> "MeetSnapshot":
        """Drop an event without touching its registrations or result."""

        return replace(self, events=tuple(event for event in self.events if event.id != event_id))

    def with_student(self, student: Student) -> "MeetSnapshot":
        if self.get_student(student.id) is None:
            return replace(self, students=self.students + (student,))
        return replace(
            self,
            students=tuple(
                student if existing.id == student.id else existing for existing in self.students
            ),
        )

