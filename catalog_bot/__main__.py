"""
Process entry point.

    python -m catalog_bot
    catalog-bot

Starts the HTTP API and, in polling mode, Telegram long polling in a
background thread. Exits with status 1 when BOT_TOKEN is missing.
"""
import logging
import sys

from dotenv import load_dotenv

from .app import create_app
from .bot import CatalogBot, start_polling_thread
from .errors import ConfigError, StorageError
from .logger import setup_logging
from .service import CatalogService
from .settings import settings
from .store import JsonStore
from .telegram import TelegramClient

logger = logging.getLogger("catalog_bot")


def main() -> None:
    load_dotenv()
    setup_logging()

    try:
        settings.validate()
    except ConfigError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    store = JsonStore(settings.DATA_FILE)
    try:
        store.ensure_exists()
    except StorageError as e:
        logger.warning(f"Could not create {settings.DATA_FILE} at startup: {e}")

    service = CatalogService(
        store,
        newest_first=settings.NEWEST_FIRST,
        require_gender=settings.REQUIRE_GENDER,
    )
    client = TelegramClient(settings.BOT_TOKEN, api_base=settings.TELEGRAM_API_BASE)
    bot = CatalogBot(service, client, allowed_chat_ids=settings.ALLOWED_CHAT_IDS)

    if settings.TELEGRAM_MODE == "polling":
        start_polling_thread(bot, timeout=settings.POLL_TIMEOUT)
    else:
        logger.info("Webhook mode: updates are received on POST /telegram/webhook")

    app = create_app(service=service, bot=bot)
    logger.info(f"✅ API listening on :{settings.PORT}")
    app.run(host="0.0.0.0", port=settings.PORT, debug=False)


if __name__ == "__main__":
    main()
