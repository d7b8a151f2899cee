from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from eventbot.core.event_spec import (
    FIELD_DELIMITER,
    RECURRING_FIELD_COUNT,
    SINGLE_FIELD_COUNT,
    EmptySpecification,
    EventMode,
    EventSpecification,
    RecurrenceKind,
)
from eventbot.core.result import RejectionReason

LOGGER = logging.getLogger(__name__)

LOCAL_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
_LOCAL_DATETIME_RE = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2}) ([0-9]{2}):([0-9]{2})$")
_INTERVAL_RE = re.compile(r"^[+-]?[0-9]+$")


@dataclass(frozen=True)
class ParseFailure:
    reason: RejectionReason
    value: str


def resolve_zone(name: str) -> ZoneInfo | None:
    # Region directories ("America") and overlong keys surface as OSError.
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def resolve_instant(text: str, zone: ZoneInfo | str) -> datetime | ParseFailure:
    """Parse ``YYYY-MM-DD HH:MM`` wall-clock text in ``zone`` into a UTC instant.

    Text of the wrong shape, impossible calendar values and wall-clock times
    skipped by a DST transition give DATE_PARSE_FAILURE. An unknown zone gives
    UNKNOWN_TIMEZONE. Ambiguous times resolve to their first occurrence.
    """
    if isinstance(zone, str):
        tz = resolve_zone(zone)
        if tz is None:
            LOGGER.debug("Unknown timezone: %s", zone)
            return ParseFailure(RejectionReason.UNKNOWN_TIMEZONE, zone)
    else:
        tz = zone
    if not _LOCAL_DATETIME_RE.match(text):
        LOGGER.debug("Invalid date format: %s", text)
        return ParseFailure(RejectionReason.DATE_PARSE_FAILURE, text)
    try:
        naive = datetime.strptime(text, LOCAL_DATETIME_FORMAT)
    except ValueError:
        LOGGER.debug("Invalid date or time: %s", text)
        return ParseFailure(RejectionReason.DATE_PARSE_FAILURE, text)
    try:
        instant = naive.replace(tzinfo=tz).astimezone(timezone.utc)
        local = instant.astimezone(tz).replace(tzinfo=None)
    except OverflowError:
        LOGGER.debug("Date out of range in %s: %s", tz.key, text)
        return ParseFailure(RejectionReason.DATE_PARSE_FAILURE, text)
    if local != naive:
        LOGGER.debug("Nonexistent local time: %s in %s", text, tz.key)
        return ParseFailure(RejectionReason.DATE_PARSE_FAILURE, text)
    return instant


def format_local(instant: datetime, zone: ZoneInfo | str) -> str:
    tz = ZoneInfo(zone) if isinstance(zone, str) else zone
    return instant.astimezone(tz).strftime(LOCAL_DATETIME_FORMAT)


def extract(
    raw_text: str,
    mode: EventMode | str,
    *,
    default_timezone: str,
) -> EventSpecification | EmptySpecification:
    """Split one ``"; "``-delimited line into an EventSpecification.

    Single events carry six fields: name; start; end; timezone; location;
    description. Schedules add recurrence kind and interval. An empty
    timezone falls back to ``default_timezone``. Anything that cannot be
    mapped onto fields comes back as EmptySpecification with the reason.
    """
    try:
        event_mode = EventMode(mode)
    except ValueError:
        LOGGER.info("Unknown event mode: %s", mode)
        return EmptySpecification(RejectionReason.INCOMPLETE_SPECIFICATION, str(mode), "mode")

    expected = RECURRING_FIELD_COUNT if event_mode is EventMode.RECURRING else SINGLE_FIELD_COUNT
    parts = [part.strip() for part in (raw_text or "").split(FIELD_DELIMITER)]
    if len(parts) != expected:
        LOGGER.info("Expected %s fields, got %s: %s", expected, len(parts), raw_text)
        return EmptySpecification(RejectionReason.MALFORMED_FIELD, raw_text or "", "fields")

    name, start_text, end_text, tz_name, location, description = parts[:6]
    if not tz_name:
        tz_name = default_timezone
    tz = resolve_zone(tz_name)
    if tz is None:
        LOGGER.info("Unknown timezone: %s", tz_name)
        return EmptySpecification(RejectionReason.UNKNOWN_TIMEZONE, tz_name, "timezone")

    instants: dict[str, datetime | None] = {}
    for field_name, text in (("start", start_text), ("end", end_text)):
        if not text:
            instants[field_name] = None
            continue
        resolved = resolve_instant(text, tz)
        if isinstance(resolved, ParseFailure):
            LOGGER.info("Cannot parse %s: %s", field_name, text)
            return EmptySpecification(resolved.reason, resolved.value, field_name)
        instants[field_name] = resolved

    spec = EventSpecification(
        name=name,
        start=instants["start"],
        end=instants["end"],
        timezone=tz_name,
        location=location,
        description=description,
        mode=event_mode,
    )
    if event_mode is EventMode.SINGLE:
        return spec

    token = parts[6].lower()
    interval_text = parts[7]
    interval: int | None = None
    if interval_text:
        if not _INTERVAL_RE.match(interval_text):
            LOGGER.info("Interval is not a number: %s", interval_text)
            return EmptySpecification(RejectionReason.MALFORMED_FIELD, interval_text, "interval")
        interval = int(interval_text)
    kind = _recurrence_kind(token)
    return EventSpecification(
        name=spec.name,
        start=spec.start,
        end=spec.end,
        timezone=spec.timezone,
        location=spec.location,
        description=spec.description,
        mode=event_mode,
        recurrence_kind=kind,
        recurrence_token=token,
        recurrence_interval=interval,
    )


def _recurrence_kind(token: str) -> RecurrenceKind:
    # Unknown tokens stay in recurrence_token; the validator reports them.
    try:
        return RecurrenceKind(token)
    except ValueError:
        return RecurrenceKind.NONE
