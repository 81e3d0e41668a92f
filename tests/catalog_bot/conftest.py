"""
Shared fixtures: a catalog on a temp file, a recording Telegram client,
a synchronous bot and a Flask test client.
"""
import pytest

from catalog_bot.app import create_app
from catalog_bot.bot import CatalogBot
from catalog_bot.service import CatalogService
from catalog_bot.store import JsonStore

from fakes import RecordingClient


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "keywords.json"


@pytest.fixture
def store(data_file):
    return JsonStore(data_file)


@pytest.fixture
def service(store):
    return CatalogService(store)


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def bot(service, client):
    return CatalogBot(service, client, async_replies=False)


@pytest.fixture
def app(service, bot, monkeypatch):
    monkeypatch.delenv("CACHE_MAX_AGE", raising=False)
    monkeypatch.delenv("WEBHOOK_SECRET", raising=False)
    flask_app = create_app(service=service, bot=bot)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def http(app):
    return app.test_client()


KAOS_POLOS = (
    "/add\n"
    "title: Kaos Polos\n"
    "price: Rp19.000\n"
    "image: https://x/i.jpg\n"
    "aff: https://x/a\n"
    "gender: pria"
)


@pytest.fixture
def kaos_polos():
    """The /add command for the "Kaos Polos" example product."""
    return KAOS_POLOS
