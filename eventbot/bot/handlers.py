from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps

from telegram import Update
from telegram.ext import ContextTypes

from eventbot.bot import routing
from eventbot.core import error_messages
from eventbot.core.calendar_backend import CalendarBackend, LocalCalendarBackend
from eventbot.core.event_service import create_event_from_text
from eventbot.core.event_spec import EventMode
from eventbot.infra.config import DEFAULT_COMMAND_PREFIX, DEFAULT_TIMEZONE, Settings
from eventbot.infra.messaging import safe_send_text

LOGGER = logging.getLogger(__name__)


def _get_settings(context: ContextTypes.DEFAULT_TYPE) -> Settings | None:
    return context.application.bot_data.get("settings")


def _get_backend(context: ContextTypes.DEFAULT_TYPE) -> CalendarBackend:
    backend = context.application.bot_data.get("calendar_backend")
    if backend is None:
        backend = LocalCalendarBackend()
        context.application.bot_data["calendar_backend"] = backend
    return backend


def _get_default_timezone(context: ContextTypes.DEFAULT_TYPE) -> str:
    settings = _get_settings(context)
    return settings.default_timezone if settings else DEFAULT_TIMEZONE


def _get_command_prefix(context: ContextTypes.DEFAULT_TYPE) -> str:
    settings = _get_settings(context)
    return settings.command_prefix if settings else DEFAULT_COMMAND_PREFIX


def _with_error_handling(
    handler: Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]],
) -> Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]:
    @wraps(handler)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = update.effective_user.id if update.effective_user else 0
        LOGGER.info("Route: user_id=%s handler=%s", user_id, handler.__name__)
        try:
            await handler(update, context)
        except Exception as exc:
            LOGGER.exception("Handler %s failed", handler.__name__)
            await _handle_exception(update, context, exc)

    return wrapper


async def _handle_exception(update: Update, context: ContextTypes.DEFAULT_TYPE, error: Exception) -> None:
    try:
        await safe_send_text(update, context, error_messages.INTERNAL_ERROR_TEXT)
        await context.application.process_error(update, error)
    except Exception:
        LOGGER.exception("Failed to forward exception to error handler")


async def _run_command(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    command: routing.EventCommand,
) -> None:
    outcome = await create_event_from_text(
        command.payload,
        command.mode,
        backend=_get_backend(context),
        default_timezone=_get_default_timezone(context),
    )
    await safe_send_text(update, context, outcome.text)


@_with_error_handling
async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = (
        "Hi! I turn one line of text into a calendar event.\n"
        "Commands: /event, /schedule, /help."
    )
    await safe_send_text(update, context, message)


@_with_error_handling
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await safe_send_text(update, context, _build_help_text(_get_command_prefix(context)))


@_with_error_handling
async def event_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _slash_command(update, context)


@_with_error_handling
async def schedule_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await _slash_command(update, context)


async def _slash_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = update.effective_message.text if update.effective_message else ""
    command = routing.parse_slash_command(text or "")
    if command is None or not command.payload:
        mode = command.mode if command else EventMode.SINGLE
        await safe_send_text(update, context, error_messages.format_hint(mode))
        return
    await _run_command(update, context, command)


@_with_error_handling
async def chat(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = update.effective_message.text if update.effective_message else ""
    commands = routing.parse_message(text or "", _get_command_prefix(context))
    if not commands:
        LOGGER.debug("No event command in message")
        return
    for command in commands:
        await _run_command(update, context, command)


@_with_error_handling
async def unknown_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await safe_send_text(update, context, "Unknown command. Try /help.")


def _build_help_text(prefix: str) -> str:
    return (
        "One-time event:\n"
        "/event Name; YYYY-MM-DD HH:MM; YYYY-MM-DD HH:MM; Timezone; Location; Description\n"
        "Recurring event:\n"
        "/schedule Name; Start; End; Timezone; Location; Description; daily|weekly; Interval\n"
        f"Text form: {prefix}New Event: ... or {prefix}New Schedule: ...\n"
        "An empty timezone uses the default zone. Weekly interval can only be 1 or 2."
    )
