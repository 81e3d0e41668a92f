"""
Environment-driven configuration for the catalog bot.
"""
import os
import logging
from typing import FrozenSet, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_DATA_FILE = os.path.join("data", "keywords.json")
DEFAULT_TELEGRAM_API_BASE = "https://api.telegram.org"

INSERT_ORDERS = ("prepend", "append")
TELEGRAM_MODES = ("polling", "webhook")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in ("true", "1", "yes", "on"):
        return True
    if raw in ("false", "0", "no", "off"):
        return False
    return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default


class Settings:
    """Configuration loaded from environment variables."""

    @classmethod
    def _get_bot_token(cls) -> Optional[str]:
        return (os.getenv("BOT_TOKEN") or "").strip() or None

    @classmethod
    def _get_allowed_chat_ids(cls) -> FrozenSet[str]:
        raw = os.getenv("ALLOWED_CHAT_IDS", "")
        return frozenset(part.strip() for part in raw.split(",") if part.strip())

    @classmethod
    def _get_insert_order(cls) -> str:
        return (os.getenv("INSERT_ORDER") or "prepend").strip().lower()

    @classmethod
    def _get_telegram_mode(cls) -> str:
        return (os.getenv("TELEGRAM_MODE") or "polling").strip().lower()

    # Properties that read from environment each time
    @property
    def BOT_TOKEN(self) -> Optional[str]:
        return self._get_bot_token()

    @property
    def ALLOWED_CHAT_IDS(self) -> FrozenSet[str]:
        return self._get_allowed_chat_ids()

    @property
    def PORT(self) -> int:
        return _env_int("PORT", DEFAULT_PORT)

    @property
    def DATA_FILE(self) -> str:
        return (os.getenv("DATA_FILE") or "").strip() or DEFAULT_DATA_FILE

    @property
    def INSERT_ORDER(self) -> str:
        return self._get_insert_order()

    @property
    def NEWEST_FIRST(self) -> bool:
        return self.INSERT_ORDER != "append"

    @property
    def REQUIRE_GENDER(self) -> bool:
        return _env_bool("REQUIRE_GENDER", False)

    @property
    def CACHE_MAX_AGE(self) -> int:
        return max(0, _env_int("CACHE_MAX_AGE", 0))

    @property
    def TELEGRAM_MODE(self) -> str:
        return self._get_telegram_mode()

    @property
    def WEBHOOK_SECRET(self) -> Optional[str]:
        return (os.getenv("WEBHOOK_SECRET") or "").strip() or None

    @property
    def TELEGRAM_API_BASE(self) -> str:
        return (os.getenv("TELEGRAM_API_BASE") or DEFAULT_TELEGRAM_API_BASE).strip().rstrip("/")

    @property
    def POLL_TIMEOUT(self) -> int:
        return max(1, _env_int("POLL_TIMEOUT", 30))

    @property
    def LOG_LEVEL(self) -> str:
        return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()

    def validate(self) -> None:
        """Validate required settings before the bot starts."""
        if not self.BOT_TOKEN:
            raise ConfigError("BOT_TOKEN missing (set it in the environment or in .env)")
        if self.INSERT_ORDER not in INSERT_ORDERS:
            raise ConfigError(f"INSERT_ORDER must be one of {', '.join(INSERT_ORDERS)}, got {self.INSERT_ORDER!r}")
        if self.TELEGRAM_MODE not in TELEGRAM_MODES:
            raise ConfigError(f"TELEGRAM_MODE must be one of {', '.join(TELEGRAM_MODES)}, got {self.TELEGRAM_MODE!r}")
        if self.TELEGRAM_MODE == "webhook" and not self.WEBHOOK_SECRET:
            logger.warning("TELEGRAM_MODE=webhook without WEBHOOK_SECRET: webhook requests are not verified")


settings = Settings()
