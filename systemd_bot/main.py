import logging
import os
import signal

from telegram import Update
from telegram.ext import Application

from systemd_bot.config import load_config
from systemd_bot.core.context import build_context
from systemd_bot.telegram.handlers import register_handlers

logger = logging.getLogger("systemd_bot")


def setup_logging(verbose=False):
    level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # httpx logs every getUpdates poll at INFO
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


async def post_init(application):
    me = application.bot
    logger.info("Launching bot: @%s (%s)", me.username, me.first_name)


async def post_shutdown(application):
    logger.info("Bot stopped")


def build_application(config):
    app = (Application.builder()
           .token(config.api_token)
           .post_init(post_init)
           .post_shutdown(post_shutdown)
           .build())
    app.bot_data["app"] = build_context(config)
    register_handlers(app)
    return app


def main():
    config = load_config()
    setup_logging(config.is_verbose)
    app = build_application(config)
    logger.info("Allowed ids: %d, controllable services: %s, interval: %ss",
                len(config.available_ids),
                ", ".join(config.controllable_services) or "none",
                config.monitor_interval)
    # getMe (initialize) and deleteWebhook (polling start) failures are fatal here
    app.run_polling(
        poll_interval=config.monitor_interval,
        allowed_updates=[Update.MESSAGE, Update.CALLBACK_QUERY],
        stop_signals=(signal.SIGINT, signal.SIGTERM),
    )


if __name__ == "__main__":
    main()
