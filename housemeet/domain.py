"""Domain records for the inter-house sports meet."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Iterator

from django.db import models

from .exceptions import InvalidBonusAward, InvalidResult


BONUS_POINTS_MIN = 1
BONUS_POINTS_MAX = 10


class House(models.TextChoices):
    ANKARA = "Ankara", "Ankara"
    BAGDAD = "Bagdad", "Bagdad"
    CAIRO = "Cairo", "Cairo"


HOUSE_COLOURS: dict[str, str] = {
    House.ANKARA.value: "#9333ea",
    House.BAGDAD.value: "#db2777",
    House.CAIRO.value: "#7f1d1d",
}

HOUSE_ORDER = {house: index for index, house in enumerate(House.values)}


class Gender(models.TextChoices):
    MALE = "Male", "Male"
    FEMALE = "Female", "Female"


class GenderCategory(models.TextChoices):
    BOYS = "Boys", "Boys"
    GIRLS = "Girls", "Girls"
    MIXED = "Mixed", "Mixed"


class EventCategory(models.TextChoices):
    MAJOR_GAME = "Major Game", "Major Game"
    ATHLETIC = "Athletic Event", "Athletic Event"


class EventStatus(models.TextChoices):
    OPEN = "Open", "Open"
    CLOSED = "Closed", "Closed"
    COMPLETED = "Completed", "Completed"


class ActivityAction(models.TextChoices):
    REGISTERED = "REGISTERED", "Registered"
    REMOVED = "REMOVED", "Removed"


class ActorRole(models.TextChoices):
    ADMIN = "ADMIN", "Administrator"
    EDITOR = "EDITOR", "Editor"
    CAPTAIN = "CAPTAIN", "House captain"
    JUDGE = "JUDGE", "Judge"


def _plain_fields(record: object, *names: str) -> None:
    """Store choice members as their plain string values."""

    for name in names:
        value = getattr(record, name)
        if isinstance(value, models.Choices):
            object.__setattr__(record, name, value.value)


@dataclass(frozen=True)
class Actor:
    """The user performing a registration change."""

    username: str
    role: str = ActorRole.ADMIN
    house: str | None = None

    def __post_init__(self) -> None:
        _plain_fields(self, "role", "house")


@dataclass(frozen=True)
class Student:
    """A student competing for one of the houses."""

    id: str
    full_name: str
    house: str
    gender: str
    date_of_birth: date
    grade: str = ""
    admission_no: str = ""

    def __post_init__(self) -> None:
        _plain_fields(self, "house", "gender")

    def __str__(self) -> str:
        return self.full_name

    @property
    def birth_year(self) -> int:
        return self.date_of_birth.year


@dataclass(frozen=True)
class Event:
    """A single competition with its own eligibility criteria."""

    id: str
    name: str
    category: str
    age_group: str
    is_team_event: bool
    gender_category: str
    status: str = EventStatus.OPEN
    schedule: datetime | None = None
    judge_id: str | None = None

    def __post_init__(self) -> None:
        _plain_fields(self, "category", "gender_category", "status")

    def __str__(self) -> str:
        return self.name

    @property
    def is_completed(self) -> bool:
        return self.status == EventStatus.COMPLETED

    @property
    def is_major_game(self) -> bool:
        return self.category == EventCategory.MAJOR_GAME

    def label(self) -> str:
        """Human readable label including age group and format."""

        kind = "Team" if self.is_team_event else "Indiv"
        return f"{self.name} ({self.age_group}) [{kind}]"


@dataclass(frozen=True)
class Registration:
    """Links a student to an event.

    ``house`` is the student's house at the time of registration. It is only
    used for per-house capacity checks; scoring always reads the student's
    current house.
    """

    id: str
    event_id: str
    student_id: str
    house: str

    def __post_init__(self) -> None:
        _plain_fields(self, "house")


def _unique(values: Iterable[str] | None) -> tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(dict.fromkeys(value for value in values if value))


@dataclass(frozen=True)
class PlacementResult:
    """The recorded outcome of one event.

    Places one to three hold tied students in submission order. Places four to
    six hold at most one student each and never score.
    """

    id: str
    event_id: str
    first: tuple[str, ...]
    second: tuple[str, ...] = ()
    third: tuple[str, ...] = ()
    fourth: str | None = None
    fifth: str | None = None
    sixth: str | None = None
    remarks: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "first", _unique(self.first))
        object.__setattr__(self, "second", _unique(self.second))
        object.__setattr__(self, "third", _unique(self.third))
        for slot in ("fourth", "fifth", "sixth"):
            object.__setattr__(self, slot, getattr(self, slot) or None)

        if not self.first:
            raise InvalidResult("Please select at least the first place winner.")

        placed = [student_id for _, students in self.places() for student_id in students]
        if len(placed) != len(set(placed)):
            raise InvalidResult("A student cannot win multiple places in the same event.")

    def podium(self) -> Iterator[tuple[int, tuple[str, ...]]]:
        """Yield ``(place, students)`` for the scoring places."""

        yield 1, self.first
        yield 2, self.second
        yield 3, self.third

    def places(self) -> Iterator[tuple[int, tuple[str, ...]]]:
        yield from self.podium()
        for place, student_id in ((4, self.fourth), (5, self.fifth), (6, self.sixth)):
            yield place, ((student_id,) if student_id else ())

    @property
    def winner_id(self) -> str:
        """The first listed first-place student."""

        return self.first[0]


@dataclass(frozen=True)
class BonusAward:
    """Manually granted points for a house.

    ``student_id`` is attribution for display only; the points always go to
    ``house``.
    """

    id: str
    house: str
    points: int
    description: str
    student_id: str | None = None

    def __post_init__(self) -> None:
        _plain_fields(self, "house")
        if self.house not in House.values:
            raise InvalidBonusAward(f"Unknown house '{self.house}'.")
        if isinstance(self.points, bool) or not isinstance(self.points, int):
            raise InvalidBonusAward("Points must be a whole number.")
        if not BONUS_POINTS_MIN <= self.points <= BONUS_POINTS_MAX:
            raise InvalidBonusAward(
                f"Points must be between {BONUS_POINTS_MIN} and {BONUS_POINTS_MAX}."
            )
        if not (self.description or "").strip():
            raise InvalidBonusAward("Please enter a description for this award.")


@dataclass(frozen=True)
class ActivityEntry:
    """Audit record for a registration change."""

    timestamp: datetime
    actor_username: str
    actor_role: str
    student_id: str
    student_name: str
    admission_no: str
    event_id: str
    event_name: str
    action: str
    house: str


@dataclass(frozen=True)
class MedalCount:
    gold: int = 0
    silver: int = 0
    bronze: int = 0

    @property
    def total(self) -> int:
        return self.gold + self.silver + self.bronze


@dataclass(frozen=True)
class HouseStanding:
    """Derived totals for one house. Never stored."""

    house: str
    gold: int = 0
    silver: int = 0
    bronze: int = 0
    bonus: int = 0
    total: int = 0
    colour: str = field(default="", compare=False)

    @property
    def medals(self) -> MedalCount:
        return MedalCount(gold=self.gold, silver=self.silver, bronze=self.bronze)

    @property
    def event_points(self) -> int:
        return self.total - self.bonus
