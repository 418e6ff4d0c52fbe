"""JSON serializers for meet snapshots and derived standings."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .domain import (
    BonusAward,
    Event,
    EventCategory,
    EventStatus,
    Gender,
    GenderCategory,
    House,
    PlacementResult,
    Registration,
    Student,
)
from .exceptions import HouseMeetError
from .snapshot import MeetSnapshot


class StudentSerializer(serializers.Serializer):
    id = serializers.CharField()
    full_name = serializers.CharField()
    admission_no = serializers.CharField(allow_blank=True, default="")
    grade = serializers.CharField(allow_blank=True, default="")
    date_of_birth = serializers.DateField()
    gender = serializers.ChoiceField(choices=Gender.choices)
    house = serializers.ChoiceField(choices=House.choices)


class EventSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    category = serializers.ChoiceField(choices=EventCategory.choices)
    age_group = serializers.CharField()
    is_team_event = serializers.BooleanField()
    gender_category = serializers.ChoiceField(choices=GenderCategory.choices)
    status = serializers.ChoiceField(choices=EventStatus.choices, default=EventStatus.OPEN)
    schedule = serializers.DateTimeField(allow_null=True, default=None)
    judge_id = serializers.CharField(allow_null=True, allow_blank=True, default=None)


class RegistrationSerializer(serializers.Serializer):
    id = serializers.CharField()
    event_id = serializers.CharField()
    student_id = serializers.CharField()
    house = serializers.ChoiceField(choices=House.choices)


class PlacementResultSerializer(serializers.Serializer):
    id = serializers.CharField()
    event_id = serializers.CharField()
    first = serializers.ListField(child=serializers.CharField())
    second = serializers.ListField(child=serializers.CharField(), default=list)
    third = serializers.ListField(child=serializers.CharField(), default=list)
    fourth = serializers.CharField(allow_null=True, allow_blank=True, default=None)
    fifth = serializers.CharField(allow_null=True, allow_blank=True, default=None)
    sixth = serializers.CharField(allow_null=True, allow_blank=True, default=None)
    remarks = serializers.CharField(allow_blank=True, default="")


class BonusAwardSerializer(serializers.Serializer):
    id = serializers.CharField()
    house = serializers.ChoiceField(choices=House.choices)
    points = serializers.IntegerField()
    description = serializers.CharField(allow_blank=True)
    student_id = serializers.CharField(allow_null=True, allow_blank=True, default=None)


class MeetSnapshotSerializer(serializers.Serializer):
    """Validates a whole meet payload and builds a :class:`MeetSnapshot`.

    Domain rules such as a non-empty first place or bonus points between 1 and
    10 are reported as field errors, as are repeated results for one event and
    repeated registrations of a student for one event.
    """

    students = StudentSerializer(many=True, required=False)
    events = EventSerializer(many=True, required=False)
    registrations = RegistrationSerializer(many=True, required=False)
    results = PlacementResultSerializer(many=True, required=False)
    bonus_awards = BonusAwardSerializer(many=True, required=False)

    def _build(self, attrs: Dict[str, Any], key: str, record_class) -> list:
        records = []
        for index, item in enumerate(attrs.get(key, [])):
            try:
                records.append(record_class(**item))
            except HouseMeetError as exc:
                raise serializers.ValidationError({key: {index: exc.messages}}) from exc
        return records

    def _reject_repeats(self, attrs: Dict[str, Any], key: str, identity, message: str) -> None:
        seen = set()
        for index, item in enumerate(attrs.get(key, [])):
            value = identity(item)
            if value in seen:
                raise serializers.ValidationError({key: {index: [message]}})
            seen.add(value)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        self._reject_repeats(
            attrs,
            "results",
            lambda item: item["event_id"],
            "An event can only have one result.",
        )
        self._reject_repeats(
            attrs,
            "registrations",
            lambda item: (item["student_id"], item["event_id"]),
            "The student is already registered for this event.",
        )
        attrs["snapshot"] = MeetSnapshot(
            students=self._build(attrs, "students", Student),
            events=self._build(attrs, "events", Event),
            registrations=self._build(attrs, "registrations", Registration),
            results=self._build(attrs, "results", PlacementResult),
            bonus_awards=self._build(attrs, "bonus_awards", BonusAward),
        )
        return attrs

    def create(self, validated_data: Dict[str, Any]) -> MeetSnapshot:
        return validated_data["snapshot"]


def load_snapshot(payload: Dict[str, Any]) -> MeetSnapshot:
    """Validate ``payload`` and return the snapshot it describes."""

    serializer = MeetSnapshotSerializer(data=payload)
    serializer.is_valid(raise_exception=True)
    return serializer.save()


def dump_snapshot(snapshot: MeetSnapshot) -> Dict[str, Any]:
    return MeetSnapshotSerializer(snapshot).data


class HouseStandingSerializer(serializers.Serializer):
    house = serializers.CharField()
    gold = serializers.IntegerField()
    silver = serializers.IntegerField()
    bronze = serializers.IntegerField()
    bonus = serializers.IntegerField()
    total = serializers.IntegerField()
    colour = serializers.CharField()


class TimelinePointSerializer(serializers.Serializer):
    label = serializers.CharField()
    kind = serializers.CharField()
    totals = serializers.DictField(child=serializers.IntegerField())
    event_id = serializers.CharField(allow_null=True)
    schedule = serializers.DateTimeField(allow_null=True)


class StandingsSerializer(serializers.Serializer):
    ranking = HouseStandingSerializer(many=True)
    timeline = TimelinePointSerializer(many=True)


class IndividualChampionSerializer(serializers.Serializer):
    student_id = serializers.CharField()
    full_name = serializers.CharField()
    house = serializers.CharField(allow_null=True)
    wins = serializers.IntegerField()


class MajorEventWinnerSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    event_name = serializers.CharField()
    student_id = serializers.CharField()
    house = serializers.CharField(allow_null=True)


class ChampionsSerializer(serializers.Serializer):
    individual = IndividualChampionSerializer(many=True)
    major_events = MajorEventWinnerSerializer(many=True)


class ActivityEntrySerializer(serializers.Serializer):
    timestamp = serializers.DateTimeField()
    actor_username = serializers.CharField()
    actor_role = serializers.CharField()
    student_id = serializers.CharField()
    student_name = serializers.CharField()
    admission_no = serializers.CharField(allow_blank=True)
    event_id = serializers.CharField()
    event_name = serializers.CharField()
    action = serializers.CharField()
    house = serializers.CharField()


class RegistrationDecisionSerializer(serializers.Serializer):
    status = serializers.CharField()
    reason = serializers.CharField(allow_null=True)
    message = serializers.CharField(allow_null=True)
