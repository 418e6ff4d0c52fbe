"""Validation errors raised by the house meet engine."""

from __future__ import annotations

from django.core.exceptions import ValidationError


class HouseMeetError(ValidationError):
    """Base class for every rejection the engine reports to its caller."""

    default_message = "The submission is not valid."
    default_code = "invalid"

    def __init__(self, message: str | None = None, code: str | None = None, params: dict | None = None):
        super().__init__(message or self.default_message, code=code or self.default_code, params=params)


class RegistrationRejected(HouseMeetError):
    default_message = "The student cannot be registered for this event."
    default_code = "registration_rejected"


class EventNotOpen(RegistrationRejected):
    default_message = "The event is not open for registration."
    default_code = "event_not_open"


class IneligibleGender(RegistrationRejected):
    default_message = "Student does not match the gender category for this event."
    default_code = "ineligible_gender"


class IneligibleAge(RegistrationRejected):
    default_message = "Student is outside the age group for this event."
    default_code = "ineligible_age"


class StudentEventCapExceeded(RegistrationRejected):
    default_message = "Student has already registered for the maximum number of individual events."
    default_code = "student_event_cap_exceeded"


class HouseCapacityExceeded(RegistrationRejected):
    default_message = "House limit reached for this event."
    default_code = "house_capacity_exceeded"


class InvalidResult(HouseMeetError):
    default_message = "The placement result is not valid."
    default_code = "invalid_result"


class InvalidBonusAward(HouseMeetError):
    default_message = "The bonus award is not valid."
    default_code = "invalid_bonus_award"


class ActorNotPermitted(HouseMeetError):
    default_message = "You are not allowed to change this registration."
    default_code = "actor_not_permitted"


class UnknownReference(HouseMeetError):
    default_message = "The referenced record does not exist."
    default_code = "unknown_reference"
