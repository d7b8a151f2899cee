from __future__ import annotations

from datetime import datetime, timezone

import pytest

from eventbot.core.event_spec import EventSpecification
from eventbot.core.result import Rejection, RejectionReason, ValidationResult, ok, rejected


def _spec() -> EventSpecification:
    return EventSpecification(
        name="Standup",
        start=datetime(2999, 1, 10, 8, 0, tzinfo=timezone.utc),
        end=datetime(2999, 1, 10, 8, 30, tzinfo=timezone.utc),
        timezone="Europe/Berlin",
        location="Office",
        description="Daily check-in",
    )


def test_ok_result_is_valid() -> None:
    result = ok(_spec())

    result.validate()
    assert result.is_ok
    assert result.to_log_dict()["status"] == "ok"
    assert result.to_log_dict()["spec"]["name"] == "Standup"


def test_rejected_result_is_valid() -> None:
    result = rejected(RejectionReason.INVALID_WEEKLY_INTERVAL, value="5", field="interval")

    result.validate()
    assert not result.is_ok
    assert result.rejection == Rejection(RejectionReason.INVALID_WEEKLY_INTERVAL, "5", "interval")
    assert result.to_log_dict() == {
        "status": "rejected",
        "reason": "invalid_weekly_interval",
        "value": "5",
        "field": "interval",
    }


@pytest.mark.parametrize(
    "result",
    [
        ValidationResult(status="ok"),
        ValidationResult(status="rejected"),
        ValidationResult(status="rejected", spec=_spec(), rejection=Rejection(RejectionReason.TIME_IN_PAST)),
        ValidationResult(status="done", spec=_spec()),  # type: ignore[arg-type]
    ],
)
def test_inconsistent_results_fail_validation(result: ValidationResult) -> None:
    with pytest.raises(ValueError):
        result.validate()
