"""
Minimal Telegram Bot API client over requests.

Endpoint:
  POST {TELEGRAM_API_BASE}/bot<BOT_TOKEN>/<method>
Body (JSON), e.g. sendMessage:
  { "chat_id": "<id>", "text": "<text>", "parse_mode": "Markdown" }
Every response is { "ok": true, "result": ... } or { "ok": false, "description": ... }.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from .errors import TelegramError
from .settings import DEFAULT_TELEGRAM_API_BASE

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 20
# Telegram rejects messages longer than this
MAX_MESSAGE_LENGTH = 4096


class TelegramClient:
    def __init__(self, token: str, api_base: str = DEFAULT_TELEGRAM_API_BASE, timeout: float = REQUEST_TIMEOUT):
        if not token:
            raise TelegramError("Telegram client needs a bot token")
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    def _url(self, method: str) -> str:
        return f"{self.api_base}/bot{self.token}/{method}"

    def call(self, method: str, payload: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None) -> Any:
        """Call a Bot API method and return its "result". Raises TelegramError."""
        try:
            resp = requests.post(self._url(method), json=payload or {}, timeout=timeout or self.timeout)
        except requests.RequestException as e:
            raise TelegramError(f"{method} request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.status_code != 200 or not data.get("ok"):
            description = data.get("description") or resp.text[:200]
            raise TelegramError(f"{method} failed ({resp.status_code}): {description}")
        return data.get("result")

    def send_message(
        self,
        chat_id: str,
        text: str,
        parse_mode: Optional[str] = None,
        disable_web_page_preview: bool = True,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text[:MAX_MESSAGE_LENGTH],
            "disable_web_page_preview": disable_web_page_preview,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode
        return self.call("sendMessage", payload)

    def send_photo(self, chat_id: str, photo_url: str, caption: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"chat_id": chat_id, "photo": photo_url}
        if caption:
            payload["caption"] = caption[:1024]
        return self.call("sendPhoto", payload)

    def get_updates(self, offset: Optional[int] = None, timeout: int = 30) -> List[Dict[str, Any]]:
        """Long-poll for new updates."""
        payload: Dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        # HTTP timeout must outlive the long-poll timeout
        return self.call("getUpdates", payload, timeout=timeout + 10) or []

    def delete_webhook(self) -> None:
        """Polling does not work while a webhook is set."""
        self.call("deleteWebhook", {"drop_pending_updates": False})
