"""
Line-based parser for chat commands.

An /add body looks like:

    title: Kaos Polos
    price: Rp19.000
    image: https://domain/foto.jpg
    aff: https://link-affiliate
    gender: pria

Each line is a `key: value` pair; anything else is ignored.
"""
import re
import logging
from typing import Dict, List, Optional, Tuple

from .models import GENDERS, PRODUCT_FIELDS, ProductFields
from .utils import collapse_whitespace

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^[A-Za-z_]+$")


def tokenize_lines(text: str) -> List[Tuple[str, str]]:
    """
    Split text into (key, value) pairs.

    Key is lowercased; value is trimmed. Lines without a colon, with a key
    that is not [A-Za-z_]+, or with an empty value are skipped.
    """
    pairs: List[Tuple[str, str]] = []
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    for line in normalized.split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if not KEY_PATTERN.match(key) or not value:
            continue
        pairs.append((key.lower(), value))
    return pairs


def parse_add_text(text: str) -> ProductFields:
    """
    Parse an /add body (command line already removed) into ProductFields.

    Unknown keys are ignored, a repeated key keeps the last value, and
    whitespace runs inside price collapse to one space. Never raises.
    """
    fields: Dict[str, str] = {}
    for key, value in tokenize_lines(text):
        if key in PRODUCT_FIELDS:
            fields[key] = value

    if fields.get("price"):
        fields["price"] = collapse_whitespace(fields["price"])

    logger.debug(f"Parsed /add body: keys={sorted(fields)}")
    return ProductFields(**fields)


def validate_fields(fields: ProductFields, require_gender: bool = False) -> List[str]:
    """
    Return missing/invalid field names in a fixed order (title, image, aff, gender).
    Empty list means the product can be added. Price is always optional.
    """
    errors: List[str] = []
    if not fields.title.strip():
        errors.append("title")
    if not fields.image.strip():
        errors.append("image")
    if not fields.aff.strip():
        errors.append("aff")
    if require_gender and fields.gender.strip().lower() not in GENDERS:
        errors.append("gender")
    return errors


def split_command(text: str) -> Tuple[Optional[str], str, str]:
    """
    Split a chat message into (command, args, body).

    "/add@my_bot\\ntitle: X" -> ("add", "", "title: X")
    "/delete kaos-polos"    -> ("delete", "kaos-polos", "")
    "hello"                 -> (None, "", "")
    """
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    first_line, _, body = normalized.lstrip().partition("\n")
    parts = first_line.strip().split(None, 1)
    if not parts or not parts[0].startswith("/"):
        return None, "", ""

    command = parts[0][1:].split("@", 1)[0].lower()
    if not command:
        return None, "", ""

    args = parts[1].strip() if len(parts) > 1 else ""
    return command, args, body
