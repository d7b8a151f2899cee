from __future__ import annotations

from datetime import datetime, timezone

import pytest

from eventbot.core.event_spec import EventMode, EventSpecification, RecurrenceDescriptor, RecurrenceKind, Weekday


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime(2026, 2, 1, tzinfo=timezone.utc), Weekday.SUNDAY),
        (datetime(2026, 2, 2, tzinfo=timezone.utc), Weekday.MONDAY),
        (datetime(2026, 2, 7, tzinfo=timezone.utc), Weekday.SATURDAY),
    ],
)
def test_weekday_from_datetime(value: datetime, expected: Weekday) -> None:
    assert Weekday.from_datetime(value) is expected


def test_weekday_out_of_range_is_a_bug() -> None:
    with pytest.raises(ValueError):
        Weekday(7)


def test_weekly_descriptor_rrule_and_human() -> None:
    descriptor = RecurrenceDescriptor(kind=RecurrenceKind.WEEKLY, interval=2, weekday=Weekday.WEDNESDAY)

    assert descriptor.to_rrule() == "FREQ=WEEKLY;INTERVAL=2;BYDAY=WE"
    assert descriptor.human() == "every 2 weeks on Wednesday"
    assert descriptor.unit == "week"


def test_daily_descriptor_rrule_and_human() -> None:
    descriptor = RecurrenceDescriptor(kind=RecurrenceKind.DAILY, interval=1)

    assert descriptor.to_rrule() == "FREQ=DAILY;INTERVAL=1"
    assert descriptor.human() == "every day"


def test_spec_log_dict() -> None:
    spec = EventSpecification(
        name="Sync",
        start=datetime(2026, 2, 4, 8, 0, tzinfo=timezone.utc),
        end=None,
        timezone="Europe/Berlin",
        location="Zoom",
        description="Roadmap",
        mode=EventMode.RECURRING,
        recurrence_kind=RecurrenceKind.DAILY,
        recurrence_token="daily",
        recurrence_interval=1,
        recurrence=RecurrenceDescriptor(kind=RecurrenceKind.DAILY, interval=1),
    )

    payload = spec.to_log_dict()

    assert payload["start"] == "2026-02-04T08:00:00+00:00"
    assert payload["end"] is None
    assert payload["mode"] == "recurring"
    assert payload["rrule"] == "FREQ=DAILY;INTERVAL=1"
    assert "description" not in payload
