from telegram import InlineKeyboardButton as B, InlineKeyboardMarkup as M
from telegram import KeyboardButton, ReplyKeyboardMarkup

from systemd_bot.core.commands import CallbackPayload, Command
from systemd_bot.telegram.formatter import MSG_CANCEL


def b(text, cb):     return B(text, callback_data=cb)


def main_keyboard():
    return ReplyKeyboardMarkup(
        [
            [KeyboardButton(c.token) for c in
             (Command.SERVICE_STATUS, Command.SERVICE_START, Command.SERVICE_STOP)],
            [KeyboardButton(c.token) for c in (Command.STATUS, Command.HELP)],
        ],
        resize_keyboard=True,
    )


def services_keyboard(command, services):
    rows  = [[b(s, CallbackPayload.for_command(command, s).encode())] for s in services]
    rows += [[b(MSG_CANCEL, CallbackPayload.cancel().encode())]]
    return M(rows)


def help_keyboard(url):
    if not url:
        return None
    return M([[B("GitHub", url=url)]])
