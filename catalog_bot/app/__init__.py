import logging
from typing import Optional

from flask import Flask
from dotenv import load_dotenv

from ..bot import CatalogBot
from ..service import CatalogService
from ..settings import settings
from ..store import JsonStore

logger = logging.getLogger(__name__)


def create_app(service: Optional[CatalogService] = None, bot: Optional[CatalogBot] = None) -> Flask:
    # load env vars
    load_dotenv()

    app = Flask(__name__)

    if service is None:
        service = CatalogService(
            JsonStore(settings.DATA_FILE),
            newest_first=settings.NEWEST_FIRST,
            require_gender=settings.REQUIRE_GENDER,
        )
    app.extensions["catalog_service"] = service
    app.extensions["catalog_bot"] = bot
    app.config["CACHE_MAX_AGE"] = settings.CACHE_MAX_AGE
    app.config["WEBHOOK_SECRET"] = settings.WEBHOOK_SECRET

    # register routes
    from . import api, webhook
    app.register_blueprint(api.bp)
    app.register_blueprint(webhook.bp)

    return app
