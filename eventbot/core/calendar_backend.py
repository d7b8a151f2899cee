"""Calendar backend abstraction.

CalendarBackend is the event-creation collaborator: it receives a validated
EventSpecification and reports success or failure. LocalCalendarBackend only
assigns an id and logs; ``get_backend()`` picks the implementation from
settings.
"""

from __future__ import annotations

import abc
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from eventbot.core.event_spec import EventSpecification

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarCreateResult:
    """Unified result of ``create_event``."""
    success: bool
    event_id: str | None = None
    backend: str = "local"
    error: str | None = None
    debug: dict[str, Any] = field(default_factory=dict)


class CalendarBackend(abc.ABC):
    """Abstract calendar backend."""

    name = "abstract"

    @abc.abstractmethod
    async def create_event(self, spec: EventSpecification) -> CalendarCreateResult:
        """Create the event described by a validated specification."""
        ...


class LocalCalendarBackend(CalendarBackend):
    """In-process backend: generates an id, nothing is stored."""

    name = "local"

    async def create_event(self, spec: EventSpecification) -> CalendarCreateResult:
        if spec.start is None or spec.end is None:
            raise ValueError("unset_datetime")
        if spec.start.tzinfo is None or spec.end.tzinfo is None:
            raise ValueError("naive_datetime")
        if spec.end <= spec.start:
            raise ValueError("invalid_event_range")
        if spec.is_recurring and spec.recurrence is None:
            raise ValueError("unresolved_recurrence")
        event_id = uuid.uuid4().hex[:8]
        debug: dict[str, Any] = {"calendar_backend": self.name, "tz": spec.timezone}
        if spec.recurrence is not None:
            debug["rrule"] = spec.recurrence.to_rrule()
        LOGGER.info(
            "Calendar event created: id=%s name=%s start=%s rrule=%s",
            event_id,
            spec.name,
            spec.start.isoformat(),
            debug.get("rrule", "-"),
        )
        return CalendarCreateResult(success=True, event_id=event_id, backend=self.name, debug=debug)


def get_backend(name: str = "local") -> CalendarBackend:
    normalized = (name or "local").strip().lower()
    if normalized != "local":
        LOGGER.warning("Unknown calendar backend %s; using local", name)
    return LocalCalendarBackend()
