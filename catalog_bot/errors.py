"""
Custom errors for the catalog bot.
Raised by the service / store layers and handled by the chat and HTTP adapters.
"""
from typing import Iterable


class CatalogBotError(Exception):
    """Generic catalog bot error."""
    pass


# ---------------- Startup ----------------

class ConfigError(CatalogBotError):
    """Required configuration missing or invalid (e.g. no BOT_TOKEN)."""
    pass


# ---------------- Business / Flow ----------------

class ValidationError(CatalogBotError):
    """Missing or invalid product fields in an /add command."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Missing or invalid fields: {', '.join(self.fields)}")


class AuthorizationError(CatalogBotError):
    """Chat is not in the allow-list."""

    def __init__(self, chat_id: str):
        self.chat_id = chat_id
        super().__init__(f"Chat {chat_id} is not allowed")


# ---------------- Integrations ----------------

class StorageError(CatalogBotError):
    """Reading or writing the JSON catalog failed."""
    pass


class TelegramError(CatalogBotError):
    """Telegram Bot API call failed."""
    pass
