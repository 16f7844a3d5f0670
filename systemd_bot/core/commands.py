import enum
from dataclasses import dataclass
from typing import Iterable, Optional


class Command(enum.Enum):
    START          = "/start"
    STATUS         = "/status"
    HELP           = "/help"
    CANCEL         = "/cancel"
    SERVICE_STATUS = "/servicestatus"
    SERVICE_START  = "/servicestart"
    SERVICE_STOP   = "/servicestop"
    UNKNOWN        = ""

    @property
    def token(self):
        return self.value


# prefix matching order; /status must come after /servicestatus
PRIORITY = (
    Command.START,
    Command.SERVICE_STATUS,
    Command.SERVICE_START,
    Command.SERVICE_STOP,
    Command.STATUS,
    Command.HELP,
    Command.CANCEL,
)

SERVICE_COMMANDS = (Command.SERVICE_START, Command.SERVICE_STOP)


@dataclass(frozen=True)
class ParsedCommand:
    command: Command
    service: str = ""


def _argument(rest: str) -> str:
    # "/servicestart@my_bot nginx" -> "nginx"
    if rest.startswith("@"):
        parts = rest.split(None, 1)
        rest  = parts[1] if len(parts) > 1 else ""
    return rest.strip()


def parse(text: Optional[str]) -> ParsedCommand:
    text = text or ""
    for cmd in PRIORITY:
        if text.startswith(cmd.token):
            if cmd in SERVICE_COMMANDS:
                return ParsedCommand(cmd, _argument(text[len(cmd.token):]))
            return ParsedCommand(cmd)
    return ParsedCommand(Command.UNKNOWN)


# ── Callback payloads ─────────────────────────────────────────────────────────

class InvalidPayload(ValueError):
    pass


@dataclass(frozen=True)
class CallbackPayload:
    """What an inline button asks for: cancel, or start/stop of one service."""

    action:  str
    service: str = ""

    CANCEL = "cancel"
    START  = "start"
    STOP   = "stop"

    @classmethod
    def cancel(cls):
        return cls(cls.CANCEL)

    @classmethod
    def for_command(cls, command: Command, service: str):
        if command is Command.SERVICE_START:
            return cls(cls.START, service)
        if command is Command.SERVICE_STOP:
            return cls(cls.STOP, service)
        raise ValueError(f"No payload for {command}")

    @property
    def command(self) -> Command:
        return {self.CANCEL: Command.CANCEL,
                self.START:  Command.SERVICE_START,
                self.STOP:   Command.SERVICE_STOP}[self.action]

    def encode(self) -> str:
        if self.action == self.CANCEL:
            return Command.CANCEL.token
        return f"{self.command.token} {self.service}"

    @classmethod
    def decode(cls, data: Optional[str], controllable: Iterable[str]):
        parsed = parse(data)
        if parsed.command is Command.CANCEL and data == Command.CANCEL.token:
            return cls.cancel()
        if parsed.command in SERVICE_COMMANDS:
            if parsed.service and parsed.service in set(controllable):
                payload = cls.for_command(parsed.command, parsed.service)
                if payload.encode() == data:
                    return payload
        raise InvalidPayload(f"Unprocessable callback data: {data!r}")
