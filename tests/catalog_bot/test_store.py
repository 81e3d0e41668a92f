"""
Tests for the JSON store: fail-open loading, full rewrites, directory self-heal.
"""
import json

import pytest

from catalog_bot.errors import StorageError
from catalog_bot.models import Catalog, Item
from catalog_bot.store import JsonStore


def _item(slug, title="T"):
    return Item(slug=slug, title=title, price="", image="https://x/i.jpg", aff="https://x/a",
                gender="", created_at="2026-10-18T09:00:00.000Z")


class TestLoad:
    """Load never fails: errors give an empty catalog."""

    def test_missing_file(self, store):
        assert store.load().items == ()

    def test_empty_file(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("", encoding="utf-8")
        assert store.load().items == ()

    def test_invalid_json(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("{not json", encoding="utf-8")
        assert store.load().items == ()

    def test_wrong_shape(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text('["a", "b"]', encoding="utf-8")
        assert store.load().items == ()

        data_file.write_text('{"items": "nope"}', encoding="utf-8")
        assert store.load().items == ()

    def test_path_is_directory(self, tmp_path):
        assert JsonStore(tmp_path).load().items == ()

    def test_reads_items(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps({"items": [{"title": "A", "image": "i", "aff": "a"}]}), encoding="utf-8")
        catalog = store.load()
        assert len(catalog.items) == 1
        assert catalog.items[0].title == "A"


class TestSave:
    """Save rewrites the whole document."""

    def test_creates_parent_directory(self, store, data_file):
        store.save(Catalog.empty().with_item(_item("a")))
        assert json.loads(data_file.read_text(encoding="utf-8"))["items"][0]["slug"] == "a"

    def test_overwrites(self, store, data_file):
        store.save(Catalog.empty().with_item(_item("a")))
        store.save(Catalog.empty().with_item(_item("b")))
        items = json.loads(data_file.read_text(encoding="utf-8"))["items"]
        assert [it["slug"] for it in items] == ["b"]

    def test_empty_catalog_document(self, store, data_file):
        store.save(Catalog.empty())
        assert json.loads(data_file.read_text(encoding="utf-8")) == {"items": []}

    def test_non_ascii_written_verbatim(self, store, data_file):
        store.save(Catalog.empty().with_item(_item("kopi", title="Kopi Gayo ☕")))
        assert "Kopi Gayo ☕" in data_file.read_text(encoding="utf-8")

    def test_self_heals_file_in_place_of_directory(self, tmp_path):
        blocker = tmp_path / "data"
        blocker.write_text("i am a file", encoding="utf-8")
        store = JsonStore(blocker / "keywords.json")

        store.save(Catalog.empty())

        assert blocker.is_dir()
        assert store.load().items == ()

    def test_self_heals_nested_ancestor(self, tmp_path):
        blocker = tmp_path / "var"
        blocker.write_text("x", encoding="utf-8")
        store = JsonStore(blocker / "lib" / "keywords.json")

        store.save(Catalog.empty().with_item(_item("a")))

        assert (blocker / "lib" / "keywords.json").is_file()

    def test_write_failure_raises_storage_error(self, store, monkeypatch):
        def boom(*args, **kwargs):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(type(store.path), "write_text", boom)
        with pytest.raises(StorageError):
            store.save(Catalog.empty())


class TestRoundTrip:
    """save(load()) keeps the parsed content unchanged."""

    def test_save_load_is_stable(self, store, data_file):
        original = {
            "items": [
                {"slug": "kaos-polos", "title": "Kaos Polos", "price": "Rp19.000", "image": "https://x/i.jpg",
                 "aff": "https://x/a", "gender": "pria", "created_at": "2026-10-18T09:00:00.000Z"},
                # legacy item without slug and with an extra key
                {"title": "Lama", "price": "", "image": "https://x/l.jpg", "aff": "https://x/l",
                 "gender": "", "created_at": "2025-01-01T00:00:00.000Z", "note": "manual"},
            ],
            "version": 1,
        }
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps(original), encoding="utf-8")

        store.save(store.load())

        assert json.loads(data_file.read_text(encoding="utf-8")) == original

    def test_ensure_exists(self, store, data_file):
        store.ensure_exists()
        assert json.loads(data_file.read_text(encoding="utf-8")) == {"items": []}

        store.save(Catalog.empty().with_item(_item("a")))
        store.ensure_exists()
        assert len(store.load().items) == 1


class TestLegacyItems:
    """Items with non-string values survive load/save and later adds."""

    LEGACY = {
        "items": [
            {"slug": "old", "title": "Lama", "price": 19000, "image": "https://x/o.jpg", "aff": "https://x/o"},
            {"slug": None, "title": "Tanpa Slug", "price": None, "image": "https://x/n.jpg", "aff": "https://x/n"},
        ]
    }

    @pytest.fixture
    def legacy_file(self, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text(json.dumps(self.LEGACY), encoding="utf-8")
        return data_file

    def test_load_keeps_items(self, store, legacy_file):
        catalog = store.load()
        assert [it.title for it in catalog.items] == ["Lama", "Tanpa Slug"]
        assert catalog.items[0].price == 19000
        assert catalog.items[1].price is None

    def test_round_trip_numeric_and_null_values(self, store, legacy_file):
        store.save(store.load())
        assert json.loads(legacy_file.read_text(encoding="utf-8")) == self.LEGACY

    def test_add_after_legacy_items_keeps_them(self, store, legacy_file):
        from catalog_bot.parser import parse_add_text
        from catalog_bot.service import CatalogService

        CatalogService(store).add(parse_add_text("title: New\nimage: https://x/new.jpg\naff: https://x/new"))

        items = json.loads(legacy_file.read_text(encoding="utf-8"))["items"]
        assert [it["slug"] for it in items] == ["new", "old", None]
        assert items[1] == self.LEGACY["items"][0]
        assert items[2] == self.LEGACY["items"][1]

    def test_null_items(self, store, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text('{"items": null}', encoding="utf-8")
        assert store.load().items == ()
