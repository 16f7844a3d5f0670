import logging

from telegram import Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import TypeHandler
from telegram.helpers import escape_markdown

from systemd_bot.core.auth import identity_of, is_authorized
from systemd_bot.core.commands import (
    SERVICE_COMMANDS, CallbackPayload, Command, InvalidPayload, parse,
)
from systemd_bot.storage.sessions import SessionState
from systemd_bot.telegram.formatter import (
    MSG_CANCELED, MSG_DEFAULT, MSG_NO_SERVICES,
    format_help, format_service_statuses, format_started, format_status,
    format_stopped, format_toast, format_unknown, service_prompt,
)
from systemd_bot.telegram.keyboards import help_keyboard, main_keyboard, services_keyboard

logger = logging.getLogger(__name__)


def _app(context): return context.bot_data["app"]


def _sender_allowed(app, user):
    identity = identity_of(user)
    if identity is None:
        logger.warning("Not allowed (no user name): %s",
                       getattr(user, "first_name", None) or "unknown")
        return None
    if not is_authorized(identity, app.config.available_ids):
        logger.warning("Id not allowed: %s", identity)
        return None
    return identity


def service_action(app, command, service):
    """Start or stop *service*; returns (message, ok)."""
    if command is Command.SERVICE_START:
        output, ok = app.controller.start(service)
        return (format_started(service) if ok else output), ok
    output, ok = app.controller.stop(service)
    return (format_stopped(service) if ok else output), ok


# ── Messages ──────────────────────────────────────────────────────────────────

def build_reply(app, session, text):
    """Reply text (Markdown) and markup for a message from *session*."""
    kb = main_keyboard()
    if session.state is not SessionState.WAITING:
        return MSG_DEFAULT, kb

    parsed = parse(text)
    cmd    = parsed.command

    if cmd is Command.START:
        return MSG_DEFAULT, kb

    if cmd is Command.SERVICE_STATUS:
        if not app.services:
            return MSG_NO_SERVICES, kb
        return format_service_statuses(app.controller.status(app.services)), kb

    if cmd in SERVICE_COMMANDS:
        if not app.services:
            return MSG_NO_SERVICES, kb
        if not app.is_controllable(parsed.service):
            return service_prompt(cmd), services_keyboard(cmd, app.services)
        message, _ = service_action(app, cmd, parsed.service)
        return escape_markdown(message), kb

    if cmd is Command.STATUS:
        return format_status(app.monitor), kb

    if cmd is Command.HELP:
        return format_help(), help_keyboard(app.config.help_url) or kb

    if cmd is Command.CANCEL:
        return MSG_CANCELED, kb

    return format_unknown(text), kb


async def handle_message(update, context):
    app      = _app(context)
    msg      = update.message
    identity = _sender_allowed(app, update.effective_user)
    if identity is None:
        return False

    async def process(session):
        text, kb = build_reply(app, session, msg.text or "")
        try:
            await context.bot.send_message(
                msg.chat_id, text, parse_mode=ParseMode.MARKDOWN, reply_markup=kb)
        except TelegramError as e:
            logger.warning("Failed to send message: %s", e)
            return False
        return True

    return await app.sessions.with_session(identity, process) is True


# ── Callbacks ─────────────────────────────────────────────────────────────────

def resolve_callback(app, payload):
    """Run what the tapped button asks for; returns the toast text ("" for cancel)."""
    if payload.action == CallbackPayload.CANCEL:
        return ""
    message, ok = service_action(app, payload.command, payload.service)
    if not ok:
        logger.warning("%s %s failed: %s", payload.action, payload.service, message)
    return message


async def handle_callback(update, context):
    app      = _app(context)
    q        = update.callback_query
    identity = _sender_allowed(app, update.effective_user)
    if identity is None:
        return False

    try:
        payload = CallbackPayload.decode(q.data, app.services)
    except InvalidPayload:
        logger.warning("Unprocessable callback query: %s", q.data)
        return False

    async def process(session):
        message = resolve_callback(app, payload)
        try:
            await q.answer(text=format_toast(message) if message else None)
        except TelegramError as e:
            logger.warning("Failed to answer callback query %s: %s", q.id, e)
            return False
        # no reply_markup: the inline keyboard is removed with the edit
        try:
            await q.edit_message_text(message or MSG_CANCELED)
        except TelegramError as e:
            logger.warning("Failed to edit message text: %s", e)
        return True

    return await app.sessions.with_session(identity, process) is True


# ── Dispatch ──────────────────────────────────────────────────────────────────

async def dispatch(update, context):
    if update.message is not None:
        return await handle_message(update, context)
    if update.callback_query is not None:
        return await handle_callback(update, context)
    logger.debug("Ignoring update %s", update.update_id)
    return False


async def on_error(update, context):
    logger.error("Error while processing update %s", update, exc_info=context.error)


def register_handlers(app):
    app.add_handler(TypeHandler(Update, dispatch))
    app.add_error_handler(on_error)
