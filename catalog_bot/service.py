"""
Catalog service: add / list / delete products on top of the JSON store.
"""
import logging
from typing import List

from .errors import ValidationError
from .models import Catalog, Item, ProductFields
from .parser import validate_fields
from .store import JsonStore
from .utils import clamp, slugify

logger = logging.getLogger(__name__)

LIST_DEFAULT = 5
LIST_MIN = 1
LIST_MAX = 50


class CatalogService:
    """
    Apply catalog operations against a JsonStore.

    Every mutation loads the whole catalog, builds a new value and saves it.
    A failed save raises StorageError and leaves nothing behind in memory.
    """

    def __init__(self, store: JsonStore, newest_first: bool = True, require_gender: bool = False):
        self.store = store
        self.newest_first = newest_first
        self.require_gender = require_gender

    def validate(self, fields: ProductFields) -> List[str]:
        return validate_fields(fields, require_gender=self.require_gender)

    def catalog(self) -> Catalog:
        return self.store.load()

    def add(self, fields: ProductFields) -> Item:
        missing = self.validate(fields)
        if missing:
            raise ValidationError(missing)

        item = Item(
            slug=slugify(fields.title),
            title=fields.title,
            price=fields.price,
            image=fields.image,
            aff=fields.aff,
            gender=fields.gender,
            created_at=fields.created_at,
        )
        updated = self.store.load().with_item(item, newest_first=self.newest_first)
        self.store.save(updated)
        logger.info(f"Added item slug={item.slug!r} (catalog size {len(updated.items)})")
        return item

    def list_latest(self, n: int = LIST_DEFAULT) -> List[Item]:
        """Most recent items first; n is clamped to [1, 50]."""
        n = clamp(n, LIST_MIN, LIST_MAX)
        return self.store.load().latest(n, newest_first=self.newest_first)

    def delete(self, slug: str) -> int:
        """Remove every item whose slug matches (case-insensitive). Returns the count."""
        updated, removed = self.store.load().without_slug(slug)
        if removed:
            self.store.save(updated)
            logger.info(f"Deleted {removed} item(s) with slug={slug!r}")
        return removed
