"""Validation result contract: ValidationResult, Rejection and helpers.

The parser and validator never raise for bad operator input. They return
ValidationResult values built with ok() / rejected(); callers branch on
status and render the rejection with error_messages.map_rejection_text().
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from eventbot.core.event_spec import EventSpecification


ResultStatus = Literal["ok", "rejected"]


class RejectionReason(str, Enum):
    INCOMPLETE_SPECIFICATION = "incomplete_specification"
    TIME_IN_PAST = "time_in_past"
    END_BEFORE_START = "end_before_start"
    INVALID_WEEKLY_INTERVAL = "invalid_weekly_interval"
    INVALID_INTERVAL = "invalid_interval"
    UNSUPPORTED_RECURRENCE = "unsupported_recurrence"
    UNKNOWN_RECURRENCE_KIND = "unknown_recurrence_kind"
    DATE_PARSE_FAILURE = "date_parse_failure"
    UNKNOWN_TIMEZONE = "unknown_timezone"
    MALFORMED_FIELD = "malformed_field"


@dataclass(frozen=True)
class Rejection:
    """Why a line was refused: reason, offending raw value, field name."""

    reason: RejectionReason
    value: str = ""
    field: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    status: ResultStatus
    spec: EventSpecification | None = None
    rejection: Rejection | None = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"

    def validate(self) -> None:
        errors = []
        if self.status not in {"ok", "rejected"}:
            errors.append("status must be ok/rejected")
        if self.status == "ok":
            if self.spec is None:
                errors.append("ok result must carry a spec")
            if self.rejection is not None:
                errors.append("ok result must not carry a rejection")
        if self.status == "rejected":
            if self.rejection is None:
                errors.append("rejected result must carry a rejection")
            if self.spec is not None:
                errors.append("rejected result must not expose a spec")
        if errors:
            raise ValueError("; ".join(errors))

    def to_log_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status}
        if self.spec is not None:
            payload["spec"] = self.spec.to_log_dict()
        if self.rejection is not None:
            payload["reason"] = self.rejection.reason.value
            payload["value"] = self.rejection.value
            payload["field"] = self.rejection.field
        return payload


def ok(spec: EventSpecification) -> ValidationResult:
    """Build ValidationResult with status='ok'."""
    return ValidationResult(status="ok", spec=spec)


def rejected(
    reason: RejectionReason,
    *,
    value: str = "",
    field: str | None = None,
) -> ValidationResult:
    """Build ValidationResult with status='rejected'."""
    return ValidationResult(
        status="rejected",
        rejection=Rejection(reason=reason, value=value, field=field),
    )
