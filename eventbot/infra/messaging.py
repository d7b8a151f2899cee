"""Reply delivery for Telegram with the configured per-message limit."""

from __future__ import annotations

import logging
from typing import Iterable

from telegram import Update
from telegram.error import BadRequest
from telegram.ext import ContextTypes

LOGGER = logging.getLogger(__name__)

MAX_CHUNK_SIZE = 3500
EMPTY_MESSAGE_PLACEHOLDER = "(empty reply)"


def chunk_text(text: str, max_len: int = MAX_CHUNK_SIZE) -> list[str]:
    """Split ``text`` into pieces of at most ``max_len`` characters.

    Cuts prefer the last newline inside the window, then the last space;
    a piece without either is cut hard at ``max_len``.
    """
    chunks: list[str] = []
    remaining = text or ""
    while len(remaining) > max_len:
        window = remaining[: max_len + 1]
        cut = window.rfind("\n")
        if cut <= 0:
            cut = window.rfind(" ")
        if cut <= 0:
            cut = max_len
        head = remaining[:cut].rstrip()
        if not head:
            head, cut = remaining[:max_len], max_len
        chunks.append(head)
        remaining = remaining[cut:].lstrip("\n ")
    if remaining:
        chunks.append(remaining)
    return chunks


def message_limit(context: ContextTypes.DEFAULT_TYPE | None) -> int:
    """Chunk size from ``settings.telegram_message_limit``, capped at MAX_CHUNK_SIZE."""
    if context is None:
        return MAX_CHUNK_SIZE
    settings = context.application.bot_data.get("settings")
    limit = getattr(settings, "telegram_message_limit", None)
    if isinstance(limit, int) and 0 < limit < MAX_CHUNK_SIZE:
        return limit
    return MAX_CHUNK_SIZE


async def _send_chunks(message, chunks: Iterable[str], *, max_len: int) -> None:
    # Telegram counts some characters as longer than Python does; halve and retry.
    fallback_len = max(1, max_len // 2)
    for chunk in chunks:
        try:
            await message.reply_text(chunk)
        except BadRequest as exc:
            if "Message is too long" not in str(exc):
                LOGGER.exception("Failed to send reply chunk: %s", exc)
                return
            LOGGER.warning("Reply chunk too long for Telegram; resending in %s-char pieces", fallback_len)
            for piece in chunk_text(chunk, max_len=fallback_len):
                await message.reply_text(piece)


async def safe_send_text(
    update: Update | None,
    context: ContextTypes.DEFAULT_TYPE | None,
    text: str | None,
) -> int:
    message = update.effective_message if update else None
    if not message:
        return 0
    payload = text if text and text.strip() else EMPTY_MESSAGE_PLACEHOLDER
    max_len = message_limit(context)
    await _send_chunks(message, chunk_text(payload, max_len=max_len), max_len=max_len)
    return len(payload)
