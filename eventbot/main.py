from __future__ import annotations

import logging

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from eventbot.bot import handlers
from eventbot.core.calendar_backend import get_backend
from eventbot.infra.config import load_settings, validate_startup_env
from eventbot.infra.logging_config import configure_logging, redact_secrets

LOGGER = logging.getLogger(__name__)


def _register_handlers(application: Application) -> None:
    application.add_handler(CommandHandler("start", handlers.start))
    application.add_handler(CommandHandler("help", handlers.help_command))
    application.add_handler(CommandHandler("event", handlers.event_command))
    application.add_handler(CommandHandler("schedule", handlers.schedule_command))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handlers.chat))
    application.add_handler(MessageHandler(filters.COMMAND, handlers.unknown_command))


def main() -> None:
    configure_logging()
    try:
        settings = load_settings()
    except RuntimeError as exc:
        LOGGER.exception("Startup failed: %s", exc)
        raise SystemExit(str(exc)) from exc
    redact_secrets(settings.bot_token)
    validate_startup_env(settings, logger=LOGGER)

    application = Application.builder().token(settings.bot_token).build()
    application.bot_data["settings"] = settings
    application.bot_data["calendar_backend"] = get_backend(settings.calendar_backend)
    _register_handlers(application)

    if settings.dry_run:
        LOGGER.info("DRY_RUN enabled; handlers registered, not polling")
        return
    LOGGER.info(
        "Bot starting: default_timezone=%s prefix=%r backend=%s",
        settings.default_timezone,
        settings.command_prefix,
        settings.calendar_backend,
    )
    application.run_polling()


if __name__ == "__main__":
    main()
