from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from eventbot.core.event_spec import (
    EmptySpecification,
    EventSpecification,
    RecurrenceDescriptor,
    RecurrenceKind,
    Weekday,
)
from eventbot.core.result import RejectionReason, ValidationResult, ok, rejected

LOGGER = logging.getLogger(__name__)

MAX_WEEKLY_INTERVAL = 2

# Not supported for whole schedules by the calendar platform.
UNSUPPORTED_KINDS = frozenset({RecurrenceKind.MONTHLY, RecurrenceKind.YEARLY})


def validate(
    spec: EventSpecification | EmptySpecification,
    *,
    now: datetime | None = None,
) -> ValidationResult:
    """Check a candidate specification and resolve its recurrence.

    Checks run in order: completeness, both instants in the future, start
    before end, then recurrence resolution for schedules. The first failing
    check decides the rejection.
    """
    if isinstance(spec, EmptySpecification):
        return rejected(spec.reason, value=spec.value, field=spec.field)

    missing = _first_missing_field(spec)
    if missing is not None:
        LOGGER.info("Event spec incomplete: field=%s", missing)
        return rejected(RejectionReason.INCOMPLETE_SPECIFICATION, field=missing)

    current = now or datetime.now(timezone.utc)
    if spec.start <= current or spec.end <= current:
        LOGGER.info("Event spec in the past: start=%s end=%s now=%s", spec.start, spec.end, current)
        field = "start" if spec.start <= current else "end"
        return rejected(RejectionReason.TIME_IN_PAST, field=field)

    if spec.start >= spec.end:
        LOGGER.info("Event spec ends before start: start=%s end=%s", spec.start, spec.end)
        return rejected(RejectionReason.END_BEFORE_START, field="end")

    if not spec.is_recurring:
        return ok(dataclasses.replace(spec, recurrence=None))
    return _resolve_recurrence(spec)


def derive_weekday(instant: datetime, zone: str) -> Weekday:
    """Weekday of the local calendar day of ``instant`` in ``zone``."""
    return Weekday.from_datetime(instant.astimezone(ZoneInfo(zone)))


def _first_missing_field(spec: EventSpecification) -> str | None:
    required = (
        ("name", spec.name),
        ("description", spec.description),
        ("timezone", spec.timezone),
        ("location", spec.location),
    )
    for field, value in required:
        if not value:
            return field
    if spec.start is None:
        return "start"
    if spec.end is None:
        return "end"
    if spec.is_recurring:
        if not spec.recurrence_token:
            return "recurrence_kind"
        if not spec.recurrence_interval:
            return "interval"
    return None


def _resolve_recurrence(spec: EventSpecification) -> ValidationResult:
    kind = spec.recurrence_kind
    interval = spec.recurrence_interval

    if kind is RecurrenceKind.DAILY:
        if interval < 0:
            return rejected(RejectionReason.INVALID_INTERVAL, value=str(interval), field="interval")
        descriptor = RecurrenceDescriptor(kind=kind, interval=interval)
    elif kind is RecurrenceKind.WEEKLY:
        if not 0 < interval <= MAX_WEEKLY_INTERVAL:
            LOGGER.info("Weekly interval out of range: %s", interval)
            return rejected(
                RejectionReason.INVALID_WEEKLY_INTERVAL,
                value=str(interval),
                field="interval",
            )
        descriptor = RecurrenceDescriptor(
            kind=kind,
            interval=interval,
            weekday=derive_weekday(spec.start, spec.timezone),
        )
    elif kind in UNSUPPORTED_KINDS:
        LOGGER.info("Unsupported recurrence requested: %s", kind.value)
        return rejected(RejectionReason.UNSUPPORTED_RECURRENCE, value=kind.value, field="recurrence_kind")
    else:
        LOGGER.info("Unknown recurrence kind: %s", spec.recurrence_token)
        return rejected(
            RejectionReason.UNKNOWN_RECURRENCE_KIND,
            value=spec.recurrence_token,
            field="recurrence_kind",
        )
    return ok(dataclasses.replace(spec, recurrence=descriptor))
