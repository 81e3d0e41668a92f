"""
Chat adapter: Telegram commands -> CatalogService -> replies.

Commands:
  /start, /help          usage
  /add + field lines     add a product
  /list                  5 most recent products
  /delete <slug>         delete products by slug

Replies are fire-and-forget: a failed send is logged and never reaches
command handling.
"""
import logging
import threading
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional

from . import messages
from .errors import AuthorizationError, StorageError, TelegramError, ValidationError
from .parser import parse_add_text, split_command
from .service import CatalogService
from .telegram import TelegramClient

logger = logging.getLogger(__name__)

LIST_IN_CHAT = 5
POLL_ERROR_BACKOFF_SEC = 5.0


class CatalogBot:
    def __init__(
        self,
        service: CatalogService,
        client: TelegramClient,
        allowed_chat_ids: Optional[Iterable[str]] = None,
        async_replies: bool = True,
    ):
        self.service = service
        self.client = client
        self.allowed_chat_ids: FrozenSet[str] = frozenset(str(c) for c in (allowed_chat_ids or ()))
        self.async_replies = async_replies
        self._handlers: Dict[str, Callable[[str, str, str], None]] = {
            "start": self._cmd_start,
            "help": self._cmd_help,
            "add": self._cmd_add,
            "list": self._cmd_list,
            "delete": self._cmd_delete,
        }
        if not self.allowed_chat_ids:
            logger.warning("ALLOWED_CHAT_IDS not set: every chat may use the bot")

    # ----------------- entry points -----------------

    def handle_update(self, update: Dict[str, Any]) -> None:
        """Handle one Telegram update (from polling or the webhook)."""
        msg = update.get("message") or {}
        chat = msg.get("chat") or {}
        chat_id = chat.get("id")
        text = msg.get("text") or ""
        if chat_id is None or not text:
            return
        self.handle_message(str(chat_id), text)

    def handle_message(self, chat_id: str, text: str) -> None:
        command, args, body = split_command(text)
        if command is None:
            return

        handler = self._handlers.get(command)
        if handler is None:
            logger.debug(f"[IGNORED] chat={chat_id} unknown command /{command}")
            return

        try:
            self._authorize(chat_id)
        except AuthorizationError as e:
            # Silently ignored, no reply
            logger.info(f"[UNAUTHORIZED] {e}")
            return

        logger.info(f"[{command.upper()}] chat={chat_id}")
        handler(chat_id, args, body)

    def _authorize(self, chat_id: str) -> None:
        if self.allowed_chat_ids and chat_id not in self.allowed_chat_ids:
            raise AuthorizationError(chat_id)

    # ----------------- commands -----------------

    def _cmd_start(self, chat_id: str, args: str, body: str) -> None:
        self._reply(chat_id, messages.start_text(self.service.require_gender))

    def _cmd_help(self, chat_id: str, args: str, body: str) -> None:
        self._reply(chat_id, messages.help_text(self.service.require_gender), markdown=True)

    def _cmd_add(self, chat_id: str, args: str, body: str) -> None:
        fields = parse_add_text(body)
        try:
            item = self.service.add(fields)
        except ValidationError as e:
            logger.info(f"[ADD_INVALID] chat={chat_id} fields={e.fields}")
            self._reply(chat_id, messages.missing_fields_text(e.fields), markdown=True)
            return
        except StorageError as e:
            logger.error(f"[ADD_FAILED] chat={chat_id}: {e}")
            self._reply(chat_id, messages.SAVE_FAILED)
            return

        logger.info(f"[ADD] chat={chat_id} slug={item.slug}")
        self._reply_with_photo(chat_id, messages.added_text(item), item.image, item.title)

    def _cmd_list(self, chat_id: str, args: str, body: str) -> None:
        items = self.service.list_latest(LIST_IN_CHAT)
        self._reply(chat_id, messages.list_text(items), markdown=True)

    def _cmd_delete(self, chat_id: str, args: str, body: str) -> None:
        parts = args.split()
        slug = parts[0] if parts else ""
        if not slug:
            self._reply(chat_id, messages.DELETE_USAGE)
            return

        try:
            removed = self.service.delete(slug)
        except StorageError as e:
            logger.error(f"[DELETE_FAILED] chat={chat_id} slug={slug}: {e}")
            self._reply(chat_id, messages.DELETE_FAILED)
            return

        if removed:
            self._reply(chat_id, messages.deleted_text(slug, removed), markdown=True)
        else:
            self._reply(chat_id, messages.not_found_text(slug), markdown=True)

    # ----------------- sending -----------------

    def _dispatch(self, job: Callable[[], None]) -> None:
        if self.async_replies:
            threading.Thread(target=job, daemon=True).start()
        else:
            job()

    def _send_text(self, chat_id: str, text: str, markdown: bool) -> None:
        try:
            self.client.send_message(chat_id, text, parse_mode="Markdown" if markdown else None)
        except Exception as e:
            logger.exception(f"Reply to chat={chat_id} failed: {e}")

    def _reply(self, chat_id: str, text: str, markdown: bool = False) -> None:
        self._dispatch(lambda: self._send_text(chat_id, text, markdown))

    def _reply_with_photo(self, chat_id: str, text: str, photo_url: str, caption: str) -> None:
        """Summary first, then the photo preview, in one job so they arrive in order."""
        def _job():
            self._send_text(chat_id, text, markdown=True)
            if not photo_url:
                return
            try:
                self.client.send_photo(chat_id, photo_url, caption=caption)
            except Exception as e:
                # Preview is best-effort
                logger.warning(f"Photo preview for chat={chat_id} failed: {e}")

        self._dispatch(_job)

    # ----------------- polling -----------------

    def run_polling(self, timeout: int = 30, stop_event: Optional[threading.Event] = None) -> None:
        """Long-poll getUpdates until stop_event is set."""
        stop_event = stop_event or threading.Event()
        offset: Optional[int] = None

        try:
            self.client.delete_webhook()
        except TelegramError as e:
            logger.warning(f"deleteWebhook failed, polling may not receive updates: {e}")

        logger.info("Telegram bot polling started.")
        while not stop_event.is_set():
            try:
                updates = self.client.get_updates(offset=offset, timeout=timeout)
            except TelegramError as e:
                logger.error(f"getUpdates failed: {e}")
                stop_event.wait(POLL_ERROR_BACKOFF_SEC)
                continue

            for update in updates:
                offset = int(update.get("update_id", 0)) + 1
                try:
                    self.handle_update(update)
                except Exception as e:
                    logger.exception(f"Update handling failed: {e}")

        logger.info("Telegram bot polling stopped.")


def start_polling_thread(bot: CatalogBot, timeout: int = 30) -> threading.Thread:
    thread = threading.Thread(target=bot.run_polling, kwargs={"timeout": timeout}, name="telegram-polling", daemon=True)
    thread.start()
    return thread
