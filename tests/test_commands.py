import pytest

from systemd_bot.core.commands import (
    CallbackPayload, Command, InvalidPayload, ParsedCommand, parse,
)


@pytest.mark.parametrize("text, expected", [
    ("/start",              ParsedCommand(Command.START)),
    ("/status",             ParsedCommand(Command.STATUS)),
    ("/help me",            ParsedCommand(Command.HELP)),
    ("/cancel",             ParsedCommand(Command.CANCEL)),
    ("/servicestatus",      ParsedCommand(Command.SERVICE_STATUS)),
    ("/servicestart",       ParsedCommand(Command.SERVICE_START, "")),
    ("/servicestart  nginx ", ParsedCommand(Command.SERVICE_START, "nginx")),
    ("/servicestop nginx",  ParsedCommand(Command.SERVICE_STOP, "nginx")),
    ("hello",               ParsedCommand(Command.UNKNOWN)),
    ("",                    ParsedCommand(Command.UNKNOWN)),
    (None,                  ParsedCommand(Command.UNKNOWN)),
])
def test_parse(text, expected):
    assert parse(text) == expected


def test_servicestatus_is_not_taken_for_status():
    assert parse("/servicestatus").command is Command.SERVICE_STATUS
    assert parse("/statusx").command is Command.STATUS


def test_bot_mention_is_not_part_of_service_name():
    assert parse("/servicestart@my_bot nginx") == ParsedCommand(Command.SERVICE_START, "nginx")
    assert parse("/servicestop@my_bot") == ParsedCommand(Command.SERVICE_STOP, "")


def test_prefix_not_at_start_is_unknown():
    assert parse(" /start").command is Command.UNKNOWN


def test_payload_encode():
    assert CallbackPayload.cancel().encode() == "/cancel"
    assert CallbackPayload.for_command(Command.SERVICE_START, "A").encode() == "/servicestart A"
    assert CallbackPayload.for_command(Command.SERVICE_STOP, "B").encode() == "/servicestop B"


def test_payload_decode():
    assert CallbackPayload.decode("/cancel", ["A"]) == CallbackPayload.cancel()
    p = CallbackPayload.decode("/servicestop A", ["A", "B"])
    assert (p.action, p.service, p.command) == ("stop", "A", Command.SERVICE_STOP)


@pytest.mark.parametrize("data", [
    None, "", "/servicestart", "/servicestart C", "/servicestatus", "/start", "/cancelled", "garbage",
])
def test_payload_decode_rejects(data):
    with pytest.raises(InvalidPayload):
        CallbackPayload.decode(data, ["A", "B"])


@pytest.mark.parametrize("data", ["/servicestartA", "/servicestart@x A", "/servicestart   A", "/servicestop A "])
def test_payload_decode_is_exact(data):
    with pytest.raises(InvalidPayload):
        CallbackPayload.decode(data, ["A"])
