from __future__ import annotations

from typing import Final

from eventbot.core.event_spec import EventMode
from eventbot.core.result import Rejection, RejectionReason

EVENT_FORMAT_TEXT: Final[str] = (
    "Event Details need this format: Name of Event; Event Start Time; Event End Time; "
    "Timezone in IANA format; Location; Description"
)
SCHEDULE_FORMAT_TEXT: Final[str] = (
    "Schedule Details need this format: Name of Event; Event Start Time; Event End Time; "
    "Timezone in IANA format; Location; Description; Interval (daily/weekly); Frequency"
)
DATE_FORMAT_TEXT: Final[str] = "Dates need the format YYYY-MM-DD HH:MM."
TIME_IN_PAST_TEXT: Final[str] = "Start or End Time is in the past. Please retry."
END_BEFORE_START_TEXT: Final[str] = "Event cannot end before the start time. Please retry."
UNSUPPORTED_RECURRENCE_TEXT: Final[str] = (
    "{kind} schedules are currently not supported by the calendar platform."
)
INTERNAL_ERROR_TEXT: Final[str] = "Something went wrong. Please try again later."


def format_hint(mode: EventMode | str) -> str:
    if mode == EventMode.RECURRING:
        return SCHEDULE_FORMAT_TEXT
    return EVENT_FORMAT_TEXT


def map_rejection_text(rejection: Rejection, mode: EventMode | str = EventMode.SINGLE) -> str:
    reason = rejection.reason
    value = rejection.value
    if reason is RejectionReason.INCOMPLETE_SPECIFICATION:
        missing = f" Missing: {rejection.field}." if rejection.field else ""
        return f"Something went wrong. Please check your Event Details.{missing}\n{format_hint(mode)}"
    if reason is RejectionReason.MALFORMED_FIELD:
        if rejection.field == "interval":
            return f"Frequency must be a whole number. Input value: {value}"
        return f"Could not split your Event Details into fields: {value}\n{format_hint(mode)}"
    if reason is RejectionReason.DATE_PARSE_FAILURE:
        return f"Invalid date: {value}. {DATE_FORMAT_TEXT}"
    if reason is RejectionReason.UNKNOWN_TIMEZONE:
        return f"Unknown timezone: {value}. Use an IANA name like Europe/Berlin."
    if reason is RejectionReason.TIME_IN_PAST:
        return TIME_IN_PAST_TEXT
    if reason is RejectionReason.END_BEFORE_START:
        return END_BEFORE_START_TEXT
    if reason is RejectionReason.INVALID_WEEKLY_INTERVAL:
        return f"Error creating weekly schedule. Interval can only be 1 or 2. Input value: {value}"
    if reason is RejectionReason.INVALID_INTERVAL:
        return f"Interval must be a positive number. Input value: {value}"
    if reason is RejectionReason.UNSUPPORTED_RECURRENCE:
        return UNSUPPORTED_RECURRENCE_TEXT.format(kind=value.capitalize() or "This")
    if reason is RejectionReason.UNKNOWN_RECURRENCE_KIND:
        return f"Failed: Schedule not valid. Input: {value}"
    return INTERNAL_ERROR_TEXT
