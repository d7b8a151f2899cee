from __future__ import annotations

import asyncio
import dataclasses

from conftest import DummyContext, make_update, schedule_line
from eventbot.bot import handlers
from eventbot.core import error_messages
from eventbot.core.calendar_backend import CalendarBackend, CalendarCreateResult, LocalCalendarBackend


class CountingBackend(CalendarBackend):
    def __init__(self) -> None:
        self.calls = []

    async def create_event(self, spec):
        self.calls.append(spec)
        return CalendarCreateResult(success=True, event_id="00000001")


FUTURE_EVENT = "Standup; 2999-01-10 09:00; 2999-01-10 09:30; Europe/Berlin; Office; Daily check-in"


def test_event_command_creates_event(settings) -> None:
    backend = CountingBackend()
    update = make_update(f"/event {FUTURE_EVENT}")
    context = DummyContext(settings, backend)

    asyncio.run(handlers.event_command(update, context))

    assert len(backend.calls) == 1
    assert update.message.reply_calls == ['Event "Standup" created for 2999-01-10 09:00 (Europe/Berlin)']


def test_schedule_command_rejects_bad_weekly_interval(settings) -> None:
    backend = CountingBackend()
    line = schedule_line(kind="weekly", interval="5", start="2999-01-10 09:00", end="2999-01-10 10:00")
    update = make_update(f"/schedule {line}")

    asyncio.run(handlers.schedule_command(update, DummyContext(settings, backend)))

    assert backend.calls == []
    assert update.message.reply_calls == [
        "Error creating weekly schedule. Interval can only be 1 or 2. Input value: 5"
    ]


def test_slash_command_without_payload_sends_format(settings) -> None:
    update = make_update("/schedule")

    asyncio.run(handlers.schedule_command(update, DummyContext(settings)))

    assert update.message.reply_calls == [error_messages.SCHEDULE_FORMAT_TEXT]


def test_chat_handles_each_prefixed_line(settings) -> None:
    backend = CountingBackend()
    text = f"morning!\n!dmb New Event: {FUTURE_EVENT}\n!dmb New Event: X; 2999-01-10 10:00; 2999-01-10 09:00; ; Y; Z"
    update = make_update(text)

    asyncio.run(handlers.chat(update, DummyContext(settings, backend)))

    assert len(backend.calls) == 1
    assert len(update.message.reply_calls) == 2
    assert update.message.reply_calls[1] == error_messages.END_BEFORE_START_TEXT


def test_chat_ignores_plain_text(settings) -> None:
    update = make_update("just talking")

    asyncio.run(handlers.chat(update, DummyContext(settings)))

    assert update.message.reply_calls == []


def test_chat_uses_configured_prefix_and_default_backend(settings) -> None:
    custom = dataclasses.replace(settings, command_prefix="cal ")
    context = DummyContext(custom)
    update = make_update(f"cal New Event: {FUTURE_EVENT}")

    asyncio.run(handlers.chat(update, context))

    assert isinstance(context.application.bot_data["calendar_backend"], LocalCalendarBackend)
    assert update.message.reply_calls[0].startswith('Event "Standup" created')


def test_unexpected_error_is_reported(settings, monkeypatch) -> None:
    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(handlers, "create_event_from_text", broken)
    update = make_update(f"/event {FUTURE_EVENT}")
    context = DummyContext(settings)

    asyncio.run(handlers.event_command(update, context))

    assert update.message.reply_calls == [error_messages.INTERNAL_ERROR_TEXT]
    assert len(context.errors) == 1
    assert str(context.errors[0]) == "boom"


def test_help_mentions_prefix(settings) -> None:
    update = make_update("/help")

    asyncio.run(handlers.help_command(update, DummyContext(settings)))

    assert "!dmb New Event:" in update.message.reply_calls[0]


def test_unknown_command_reply(settings) -> None:
    update = make_update("/nope")

    asyncio.run(handlers.unknown_command(update, DummyContext(settings)))

    assert update.message.reply_calls == ["Unknown command. Try /help."]
