import hmac
import json

from flask import Blueprint, abort, current_app, request

bp = Blueprint("webhook", __name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def _verify_secret() -> bool:
    """Check Telegram's secret token header when WEBHOOK_SECRET is configured."""
    secret = current_app.config.get("WEBHOOK_SECRET")
    if not secret:
        return True  # in dev we don't verify
    return hmac.compare_digest(request.headers.get(SECRET_HEADER, ""), secret)


@bp.post("/telegram/webhook")
def telegram_webhook():
    if not _verify_secret():
        current_app.logger.error("Invalid %s", SECRET_HEADER)
        abort(403)

    bot = current_app.extensions.get("catalog_bot")
    if bot is None:
        current_app.logger.warning("Telegram update received but no bot is attached")
        abort(404)

    data = request.get_json(force=True, silent=True) or {}
    current_app.logger.debug("Incoming update: %s", json.dumps(data, ensure_ascii=False))

    try:
        bot.handle_update(data)
    except Exception as e:
        # Telegram redelivers updates answered with non-2xx
        current_app.logger.exception("Update handling failed: %s", e)
    return "OK", 200
