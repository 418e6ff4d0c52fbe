"""Demo meet used by ``meet_demo_snapshot`` and the tests."""
from __future__ import annotations

from datetime import date, datetime

from django.utils import timezone

from .domain import Event, EventCategory, Gender, GenderCategory, House, Student
from .snapshot import MeetSnapshot

M, F = Gender.MALE, Gender.FEMALE

DEMO_STUDENTS: tuple[tuple[str, str, str, str, str, Gender, House], ...] = (
    # id, name, admission no, grade, dob, gender, house
    ("s1", "K. Perera", "7001", "12", "2008-05-15", M, House.ANKARA),
    ("s2", "N. Silva", "7002", "10", "2010-08-20", F, House.ANKARA),
    ("s3", "M. Fazil", "7003", "13", "2007-01-10", M, House.ANKARA),
    ("s4", "S. Jones", "7004", "8", "2012-03-15", F, House.ANKARA),
    ("s5", "R. Dissanaike", "7005", "11", "2009-11-05", M, House.ANKARA),
    ("s6", "K. Jayasuriya", "7006", "9", "2011-06-22", F, House.ANKARA),
    ("s7", "A. Riaz", "7007", "7", "2013-09-12", M, House.ANKARA),
    ("s8", "Y. Banu", "7008", "12", "2008-02-14", F, House.ANKARA),
    ("s9", "D. Gunathilaka", "7009", "6", "2014-05-30", M, House.ANKARA),
    ("s10", "A. Takia", "7010", "10", "2010-12-01", F, House.ANKARA),
    ("s11", "F. Ahmed", "8001", "13", "2007-04-10", M, House.BAGDAD),
    ("s12", "S. Peiris", "8002", "9", "2011-09-15", F, House.BAGDAD),
    ("s13", "R. Teja", "8003", "11", "2009-02-28", M, House.BAGDAD),
    ("s14", "M. George", "8004", "7", "2013-11-20", F, House.BAGDAD),
    ("s15", "I. Udana", "8005", "12", "2008-07-07", M, House.BAGDAD),
    ("s16", "H. Ziyad", "8006", "8", "2012-01-05", F, House.BAGDAD),
    ("s17", "K. Rajitha", "8007", "10", "2010-06-18", M, House.BAGDAD),
    ("s18", "Z. Rimzan", "8008", "6", "2014-08-25", F, House.BAGDAD),
    ("s19", "O. Khayam", "8009", "13", "2007-12-12", M, House.BAGDAD),
    ("s20", "S. Perera", "8010", "11", "2009-03-30", F, House.BAGDAD),
    ("s21", "S. Jayasuriya", "9001", "12", "2008-01-01", M, House.CAIRO),
    ("s22", "F. Nuzha", "9002", "8", "2012-05-10", F, House.CAIRO),
    ("s23", "D. Chandimal", "9003", "13", "2007-09-22", M, House.CAIRO),
    ("s24", "A. Weerasinghe", "9004", "10", "2010-02-15", F, House.CAIRO),
    ("s25", "B. Hassim", "9005", "7", "2013-07-08", M, House.CAIRO),
    ("s26", "S. Nazeer", "9006", "11", "2009-10-12", F, House.CAIRO),
    ("s27", "N. Pradeep", "9007", "9", "2011-04-18", M, House.CAIRO),
    ("s28", "R. Faleel", "9008", "6", "2014-11-30", F, House.CAIRO),
    ("s29", "T. Kaushal", "9009", "12", "2008-08-05", M, House.CAIRO),
    ("s30", "M. Muneer", "9010", "13", "2007-03-25", F, House.CAIRO),
)


def demo_students() -> list[Student]:
    return [
        Student(
            id=student_id,
            full_name=name,
            admission_no=admission_no,
            grade=grade,
            date_of_birth=date.fromisoformat(dob),
            gender=gender,
            house=house,
        )
        for student_id, name, admission_no, grade, dob, gender, house in DEMO_STUDENTS
    ]


def demo_events() -> list[Event]:
    return [
        Event(
            id="e1",
            name="100m Sprint",
            category=EventCategory.ATHLETIC,
            age_group="Under 20",
            is_team_event=False,
            gender_category=GenderCategory.BOYS,
            schedule=timezone.make_aware(datetime(2026, 3, 15, 9, 0)),
        ),
        Event(
            id="e2",
            name="Relay 4x100m",
            category=EventCategory.ATHLETIC,
            age_group="Under 18",
            is_team_event=True,
            gender_category=GenderCategory.GIRLS,
            schedule=timezone.make_aware(datetime(2026, 3, 15, 11, 30)),
        ),
        Event(
            id="e3",
            name="Volleyball",
            category=EventCategory.MAJOR_GAME,
            age_group="Open",
            is_team_event=True,
            gender_category=GenderCategory.BOYS,
            schedule=timezone.make_aware(datetime(2026, 3, 16, 15, 0)),
        ),
    ]


def demo_snapshot() -> MeetSnapshot:
    """The seed meet: three houses, thirty students and three open events."""

    return MeetSnapshot(students=demo_students(), events=demo_events())
