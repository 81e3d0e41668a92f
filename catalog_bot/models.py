"""
Pydantic v2 models for catalog data.
"""
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import now_iso

# Field names accepted in an /add command body
PRODUCT_FIELDS = ("title", "price", "image", "aff", "gender")

GENDERS = ("pria", "wanita")


def as_text(value: Any) -> str:
    """Display form of a stored field: None -> "", anything else -> str."""
    return "" if value is None else str(value)


class ProductFields(BaseModel):
    """Result of parsing an /add command body. Never validated here."""
    title: str = ""
    price: str = ""
    image: str = ""
    aff: str = ""
    gender: str = ""
    created_at: str = Field(default_factory=now_iso)


class Item(BaseModel):
    """
    A persisted catalog product.

    Fields accept any JSON value: items written by hand or by older
    versions (numeric price, null slug) are carried through untouched.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    slug: Any = ""
    title: Any = ""
    price: Any = ""
    image: Any = ""
    aff: Any = ""
    gender: Any = ""
    created_at: Any = ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for the JSON file.
        Only keys that were set are written, so items loaded from disk
        are saved back exactly as they were read.
        """
        data = {name: getattr(self, name) for name in type(self).model_fields if name in self.model_fields_set}
        data.update(self.model_extra or {})
        return data


class Catalog(BaseModel):
    """The whole JSON document: {"items": [...]}. Immutable value."""
    model_config = ConfigDict(frozen=True, extra="allow")

    items: Tuple[Item, ...] = ()

    @field_validator("items", mode="before")
    @classmethod
    def _null_items(cls, value: Any) -> Any:
        # {"items": null} is read as an empty list
        return () if value is None else value

    @classmethod
    def empty(cls) -> "Catalog":
        return cls(items=())

    def with_item(self, item: Item, newest_first: bool = True) -> "Catalog":
        """Return a new catalog with item prepended (newest first) or appended."""
        if newest_first:
            items = (item,) + self.items
        else:
            items = self.items + (item,)
        return self.model_copy(update={"items": items})

    def without_slug(self, slug: str) -> Tuple["Catalog", int]:
        """Return (new catalog, removed count) without items matching slug (case-insensitive)."""
        target = (slug or "").strip().lower()
        if not target:
            return self, 0
        kept = tuple(it for it in self.items if as_text(it.slug).lower() != target)
        removed = len(self.items) - len(kept)
        if not removed:
            return self, 0
        return self.model_copy(update={"items": kept}), removed

    def latest(self, n: int, newest_first: bool = True) -> List[Item]:
        """Most recent n items, most recent first."""
        ordered = self.items if newest_first else tuple(reversed(self.items))
        return list(ordered[:n])

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.model_extra or {})
        data["items"] = [it.to_dict() for it in self.items]
        return data
