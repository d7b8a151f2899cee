"""Process-wide logging for the event bot.

configure_logging() sets the root level and format, adds an optional
rotating file (LOG_FILE or LOGFILE_PATH) and quiets the HTTP and telegram
libraries. redact_secrets() masks known secret values (the bot token) in
every record that reaches the root handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_DEFAULT_LEVEL = "INFO"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_NOISY_LOGGERS = ("httpx", "httpcore", "telegram", "telegram.ext")
REDACTED = "***"


class SecretRedactingFilter(logging.Filter):
    """Replace secret values in the rendered message with ``REDACTED``."""

    def __init__(self, secrets: tuple[str, ...]) -> None:
        super().__init__()
        self.secrets = tuple(secret for secret in secrets if secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        redacted = message
        for secret in self.secrets:
            redacted = redacted.replace(secret, REDACTED)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _level_from_env() -> int:
    raw = os.environ.get("LOG_LEVEL", _DEFAULT_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def _log_file_from_env() -> str | None:
    path = (os.environ.get("LOG_FILE") or os.environ.get("LOGFILE_PATH") or "").strip()
    return path or None


def _build_file_handler(log_file: str, level: int, formatter: logging.Formatter) -> logging.Handler | None:
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as exc:
        logging.getLogger(__name__).warning(
            "Could not open log file %s: %s; logging to stderr only", log_file, exc
        )
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(*, level: int | None = None, log_file: str | None = None) -> None:
    """Configure root logging once at startup.

    Args:
        level: Log level. If None, taken from LOG_LEVEL (unknown names fall back to INFO).
        log_file: Rotating log file path. If None, from LOG_FILE or LOGFILE_PATH.
    """
    if level is None:
        level = _level_from_env()
    if log_file is None:
        log_file = _log_file_from_env()

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)
    # Repeated calls replace handlers instead of stacking them.
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        file_handler = _build_file_handler(log_file, level, formatter)
        if file_handler is not None:
            root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def redact_secrets(*secrets: str) -> None:
    """Attach a redacting filter to every root handler."""
    redactor = SecretRedactingFilter(secrets)
    for handler in logging.getLogger().handlers:
        for existing in [f for f in handler.filters if isinstance(f, SecretRedactingFilter)]:
            handler.removeFilter(existing)
        handler.addFilter(redactor)
