from telegram.helpers import escape_markdown

from systemd_bot.core.commands import Command

MSG_DEFAULT          = "Input your command:"
MSG_UNKNOWN_COMMAND  = "Unknown command."
MSG_NO_SERVICES      = "No controllable services."
MSG_SERVICE_TO_START = "Select service to start:"
MSG_SERVICE_TO_STOP  = "Select service to stop:"
MSG_CANCEL           = "Cancel"
MSG_CANCELED         = "Canceled."

TOAST_LIMIT = 200


def format_help():
    return (
        "\nFollowing commands are supported:\n\n"
        "*For Systemctl*\n\n"
        f"{Command.SERVICE_STATUS.token} : show status of each service (systemctl is-active)\n"
        f"{Command.SERVICE_START.token} : start a service (systemctl start)\n"
        f"{Command.SERVICE_STOP.token} : stop a service (systemctl stop)\n\n"
        "*Others*\n\n"
        f"{Command.STATUS.token} : show this bot's status\n"
        f"{Command.HELP.token} : show this help message\n"
    )


def format_status(monitor):
    return f"Uptime: {monitor.uptime()}\nMemory Usage: {monitor.memory_usage()}"


def format_service_statuses(statuses):
    if not statuses:
        return MSG_NO_SERVICES
    return "\n".join(f"{escape_markdown(name)}: {_bold(state)}" for name, state in statuses.items())


def _bold(text):
    # legacy Markdown ignores "\" inside an entity; text with "*" stays unbolded
    if "*" in text:
        return escape_markdown(text)
    return f"*{text}*"


def format_started(name): return f"Started service: {name}"
def format_stopped(name): return f"Stopped service: {name}"


def format_unknown(text):
    if not text:
        return MSG_UNKNOWN_COMMAND
    return f"{_bold(text)}: {MSG_UNKNOWN_COMMAND}"


def format_toast(text):
    if len(text) <= TOAST_LIMIT:
        return text
    return text[:TOAST_LIMIT - 1] + "…"


def service_prompt(command):
    return MSG_SERVICE_TO_START if command is Command.SERVICE_START else MSG_SERVICE_TO_STOP
