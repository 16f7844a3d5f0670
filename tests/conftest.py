from types import SimpleNamespace

import pytest
from telegram.error import TelegramError

from systemd_bot.config import Config
from systemd_bot.core.context import AppContext
from systemd_bot.monitor.process import ProcessMonitor
from systemd_bot.storage.sessions import SessionStore


class FakeController:
    def __init__(self, states=None, fail=None):
        self.calls  = []
        self.states = states or {}
        self.fail   = fail or {}

    def status(self, names):
        self.calls.append(("status", tuple(names)))
        return {n: self.states.get(n, "inactive") for n in names}

    def start(self, name):
        return self._action("start", name)

    def stop(self, name):
        return self._action("stop", name)

    def _action(self, action, name):
        self.calls.append((action, name))
        if name in self.fail:
            return self.fail[name], False
        return "", True


class FakeBot:
    def __init__(self, error=None):
        self.sent  = []
        self.error = error

    async def send_message(self, chat_id, text, parse_mode=None, reply_markup=None):
        if self.error:
            raise TelegramError(self.error)
        self.sent.append({"chat_id": chat_id, "text": text,
                          "parse_mode": parse_mode, "reply_markup": reply_markup})


class FakeQuery:
    def __init__(self, data, answer_error=None, edit_error=None):
        self.id           = "q1"
        self.data         = data
        self.answers      = []
        self.edits        = []
        self.answer_error = answer_error
        self.edit_error   = edit_error

    async def answer(self, text=None):
        if self.answer_error:
            raise TelegramError(self.answer_error)
        self.answers.append(text)

    async def edit_message_text(self, text, reply_markup=None):
        if self.edit_error:
            raise TelegramError(self.edit_error)
        self.edits.append({"text": text, "reply_markup": reply_markup})


def user(username="alice", first_name="Alice"):
    return SimpleNamespace(username=username, first_name=first_name)


def message_update(text, sender=None):
    return SimpleNamespace(
        update_id=1,
        message=SimpleNamespace(text=text, chat_id=42),
        callback_query=None,
        effective_user=sender if sender is not None else user(),
    )


def callback_update(query, sender=None):
    return SimpleNamespace(
        update_id=2,
        message=None,
        callback_query=query,
        effective_user=sender if sender is not None else user(),
    )


def make_app(services=("A", "B"), ids=("alice", "bob"), controller=None, help_url=None):
    config = Config(api_token="123:abc", available_ids=tuple(ids),
                    controllable_services=tuple(services), help_url=help_url)
    return AppContext(
        config=config,
        sessions=SessionStore(config.available_ids),
        controller=controller or FakeController(),
        monitor=ProcessMonitor(),
    )


def make_context(app, bot=None):
    return SimpleNamespace(bot=bot or FakeBot(), bot_data={"app": app})


@pytest.fixture
def controller():
    return FakeController(states={"A": "active"})


@pytest.fixture
def app(controller):
    return make_app(controller=controller)
