"""Glue between one command line and the calendar backend.

create_event_from_text() runs extract -> validate -> backend and always
returns an EventOutcome with the reply text for the operator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from eventbot.core import error_messages
from eventbot.core.calendar_backend import CalendarBackend
from eventbot.core.event_parse import extract, format_local
from eventbot.core.event_spec import EventMode, EventSpecification
from eventbot.core.event_validate import validate
from eventbot.core.result import Rejection

LOGGER = logging.getLogger(__name__)

OutcomeStatus = Literal["ok", "rejected", "error"]


@dataclass(frozen=True)
class EventOutcome:
    status: OutcomeStatus
    text: str
    spec: EventSpecification | None = None
    rejection: Rejection | None = None
    event_id: str | None = None


async def create_event_from_text(
    raw_text: str,
    mode: EventMode | str,
    *,
    backend: CalendarBackend,
    default_timezone: str,
    now: datetime | None = None,
) -> EventOutcome:
    LOGGER.info("Invoking new %s: %s", "schedule" if mode == EventMode.RECURRING else "event", raw_text)
    candidate = extract(raw_text, mode, default_timezone=default_timezone)
    result = validate(candidate, now=now)
    if result.rejection is not None:
        LOGGER.warning("Event rejected: %s", result.to_log_dict())
        return EventOutcome(
            status="rejected",
            text=error_messages.map_rejection_text(result.rejection, mode),
            rejection=result.rejection,
        )

    spec = result.spec
    try:
        created = await backend.create_event(spec)
    except Exception as exc:
        LOGGER.exception("Failed to create event: %s", spec.name)
        return EventOutcome(status="error", text=f"Failed to create event: {exc}", spec=spec)
    if not created.success:
        LOGGER.error("Backend refused event: name=%s error=%s", spec.name, created.error)
        return EventOutcome(
            status="error",
            text=f"Failed to create event: {created.error or 'unknown error'}",
            spec=spec,
        )

    text = render_created_text(spec)
    LOGGER.info("%s id=%s", text, created.event_id)
    return EventOutcome(status="ok", text=text, spec=spec, event_id=created.event_id)


def render_created_text(spec: EventSpecification) -> str:
    start_label = f"{format_local(spec.start, spec.timezone)} ({spec.timezone})"
    text = f'Event "{spec.name}" created for {start_label}'
    if spec.recurrence is None:
        return text
    return (
        f"{text} with schedule {spec.recurrence.kind.value} repeated every "
        f"{spec.recurrence.interval} {spec.recurrence.unit}(s)."
    )
