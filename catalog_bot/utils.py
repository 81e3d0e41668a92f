"""
Utility functions for slugs, timestamps and whitespace.
"""
import re
import unicodedata
from datetime import datetime

import pytz

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """
    Derive a URL-safe slug from a product title.

    "Kaos Polos Pria & Wanita | Baju" -> "kaos-polos-pria-wanita-baju"
    "Café Crème" -> "cafe-creme"

    Idempotent: slugify(slugify(x)) == slugify(x).
    """
    # Accents -> base characters (é -> e); lowercase after, since NFKD can yield capitals (ℌ -> H)
    value = unicodedata.normalize("NFKD", text or "")
    value = "".join(ch for ch in value if not unicodedata.combining(ch)).lower()
    value = _NON_SLUG_CHARS.sub("", value).strip()
    value = _WHITESPACE.sub("-", value)
    value = _HYPHENS.sub("-", value)
    return value.strip("-")


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return _WHITESPACE.sub(" ", text or "").strip()


def utc_now() -> datetime:
    return datetime.now(tz=pytz.UTC)


def now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2026-10-18T09:00:00.000Z"""
    return to_iso(utc_now())


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    dt = dt.astimezone(pytz.UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    """Parse timestamps produced by to_iso (the 'Z' suffix included)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))
