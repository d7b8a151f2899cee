import sys
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eventbot.infra.config import Settings  # noqa: E402

# 2026-02-01 is a Sunday.
FIXED_NOW = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)


def event_line(
    name: str = "Standup",
    start: str = "2026-02-04 09:00",
    end: str = "2026-02-04 09:30",
    tz: str = "Europe/Berlin",
    location: str = "Office",
    description: str = "Daily check-in",
) -> str:
    return "; ".join([name, start, end, tz, location, description])


def schedule_line(kind: str = "weekly", interval: str = "1", **kwargs: str) -> str:
    return "; ".join([event_line(**kwargs), kind, interval])


class DummyMessage:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.reply_calls: list[str] = []

    async def reply_text(self, text, reply_markup=None):
        self.reply_calls.append(text)


class DummyContext:
    def __init__(self, settings: Settings | None = None, backend=None) -> None:
        bot_data: dict[str, object] = {}
        if settings is not None:
            bot_data["settings"] = settings
        if backend is not None:
            bot_data["calendar_backend"] = backend
        self.errors: list[Exception] = []

        async def process_error(update, error):
            self.errors.append(error)

        self.application = SimpleNamespace(bot_data=bot_data, process_error=process_error)


def make_update(text: str) -> SimpleNamespace:
    message = DummyMessage(text)
    return SimpleNamespace(
        effective_user=SimpleNamespace(id=1, username="tester"),
        effective_chat=SimpleNamespace(id=10),
        message=message,
        effective_message=message,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bot_token="123:TEST",
        default_timezone="Europe/Amsterdam",
        command_prefix="!dmb ",
        telegram_message_limit=4000,
        calendar_backend="local",
        dry_run=False,
    )
