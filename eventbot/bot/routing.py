from __future__ import annotations

from dataclasses import dataclass

from eventbot.core.event_spec import EventMode

COMMAND_SEPARATOR = ": "
NEW_EVENT_COMMAND = "new event"
NEW_SCHEDULE_COMMAND = "new schedule"

_TEXT_COMMAND_MODES = {
    NEW_EVENT_COMMAND: EventMode.SINGLE,
    NEW_SCHEDULE_COMMAND: EventMode.RECURRING,
}
_SLASH_COMMAND_MODES = {
    "/event": EventMode.SINGLE,
    "/schedule": EventMode.RECURRING,
}


@dataclass(frozen=True)
class EventCommand:
    mode: EventMode
    payload: str


def normalize_command(text: str) -> str:
    trimmed = (text or "").strip()
    if not trimmed.startswith("/"):
        return ""
    command = trimmed.split(maxsplit=1)[0]
    if "@" in command:
        command = command.split("@", maxsplit=1)[0]
    return command.lower()


def parse_command_line(line: str, prefix: str) -> EventCommand | None:
    """``<prefix>New Event: <payload>`` -> EventCommand, anything else -> None."""
    if not prefix or not line.lower().startswith(prefix.lower()):
        return None
    body = line[len(prefix):]
    name, separator, payload = body.partition(COMMAND_SEPARATOR)
    if not separator:
        return None
    mode = _TEXT_COMMAND_MODES.get(name.strip().lower())
    if mode is None:
        return None
    return EventCommand(mode=mode, payload=payload.strip())


def parse_message(text: str, prefix: str) -> list[EventCommand]:
    commands = []
    for line in (text or "").split("\n"):
        command = parse_command_line(line.strip(), prefix)
        if command is not None:
            commands.append(command)
    return commands


def parse_slash_command(text: str) -> EventCommand | None:
    command = normalize_command(text)
    mode = _SLASH_COMMAND_MODES.get(command)
    if mode is None:
        return None
    parts = (text or "").strip().split(maxsplit=1)
    payload = parts[1].strip() if len(parts) > 1 else ""
    return EventCommand(mode=mode, payload=payload)
