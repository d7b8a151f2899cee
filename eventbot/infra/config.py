from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Europe/Amsterdam"
DEFAULT_COMMAND_PREFIX = "!dmb "
DRY_RUN_TOKEN = "000000:DRY_RUN_TOKEN"


@dataclass(frozen=True)
class Settings:
    bot_token: str
    default_timezone: str
    command_prefix: str
    telegram_message_limit: int
    calendar_backend: str
    dry_run: bool


def validate_startup_env(settings: Settings, *, logger: logging.Logger | None = None) -> None:
    log = logger or LOGGER
    if not settings.dry_run and not settings.bot_token:
        log.error("startup.env invalid: BOT_TOKEN missing")
        raise SystemExit("BOT_TOKEN is not set")
    try:
        ZoneInfo(settings.default_timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        log.error("startup.env invalid: DEFAULT_TIMEZONE=%s", settings.default_timezone)
        raise SystemExit(f"DEFAULT_TIMEZONE is not a known IANA zone: {settings.default_timezone}")
    if not settings.command_prefix.strip():
        log.error("startup.env invalid: COMMAND_PREFIX empty")
        raise SystemExit("COMMAND_PREFIX must not be empty")


def load_settings() -> Settings:
    _load_dotenv()

    env = os.environ
    dry_run = _parse_optional_bool(env.get("DRY_RUN")) is True

    token = env.get("BOT_TOKEN")
    if not token:
        if dry_run:
            # Placeholder so code that expects a non-empty token keeps working.
            token = DRY_RUN_TOKEN
        else:
            raise RuntimeError("BOT_TOKEN is not set")

    default_timezone = (env.get("DEFAULT_TIMEZONE") or "").strip() or DEFAULT_TIMEZONE
    command_prefix = env.get("COMMAND_PREFIX") or DEFAULT_COMMAND_PREFIX
    telegram_message_limit = _parse_int_with_default(env.get("TELEGRAM_MESSAGE_LIMIT"), 4000)
    calendar_backend = env.get("CALENDAR_BACKEND", "local").strip().lower()
    if calendar_backend not in {"local"}:
        calendar_backend = "local"
    return Settings(
        bot_token=token,
        default_timezone=default_timezone,
        command_prefix=command_prefix,
        telegram_message_limit=telegram_message_limit,
        calendar_backend=calendar_backend,
        dry_run=dry_run,
    )


def _load_dotenv() -> None:
    try:
        from dotenv import load_dotenv
    except ImportError:
        LOGGER.debug("python-dotenv is not installed; skipping .env loading")
        return
    load_dotenv()


def _parse_optional_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    trimmed = value.strip().lower()
    if not trimmed:
        return None
    return trimmed in {"1", "true", "yes", "on"}


def _parse_int_with_default(value: str | None, default: int) -> int:
    if value is None:
        return default
    trimmed = value.strip()
    if not trimmed:
        return default
    return int(trimmed)
