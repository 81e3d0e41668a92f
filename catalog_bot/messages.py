# messages.py
"""Reply texts sent to the chat (Indonesian, Telegram Markdown)."""
from typing import Any, Iterable, List

from .models import Item, as_text

ADD_FORMAT = (
    "/add\n"
    "title: Nama Produk\n"
    "price: Rp19.000\n"
    "image: https://domain/foto.jpg\n"
    "aff: https://link-affiliate\n"
    "gender: pria|wanita"
)

ADD_EXAMPLE = (
    "/add\n"
    "title: Kaos Polos Pria & Wanita | Baju Polos Termurah\n"
    "price: Rp19.000\n"
    "image: https://s12.gifyu.com/images/xxxx.jpg\n"
    "aff: https://s.shopee.co.id/xxxxx\n"
    "gender: pria"
)

_MARKDOWN_SPECIAL = ("_", "*", "`", "[")


def escape_md(text: Any) -> str:
    """Escape user text for Telegram's legacy Markdown (backslash itself cannot be escaped)."""
    out = as_text(text)
    for ch in _MARKDOWN_SPECIAL:
        out = out.replace(ch, "\\" + ch)
    return out


def _gender_hint(require_gender: bool) -> str:
    return "gender: pria|wanita" + ("" if require_gender else " (opsional)")


def start_text(require_gender: bool = False) -> str:
    fmt = ADD_FORMAT.replace("gender: pria|wanita", _gender_hint(require_gender))
    return (
        "Hai! Kirim produk dengan format:\n\n"
        f"{fmt}\n\n"
        "Perintah lain:\n"
        "/list – 5 produk terbaru\n"
        "/delete <slug> – hapus produk\n"
        "/help – bantuan format"
    )


def help_text(require_gender: bool = False) -> str:
    required = "title, image, aff" + (", gender" if require_gender else "")
    return (
        "*Format /add*\n"
        f"Wajib: {required}. Price opsional.\n"
        "Satu field per baris, `nama: nilai`.\n\n"
        f"Contoh:\n```\n{ADD_EXAMPLE}\n```"
    )


def missing_fields_text(fields: Iterable[str]) -> str:
    return (
        f"❌ Gagal: field wajib belum lengkap → {', '.join(fields)}.\n\n"
        f"Contoh:\n```\n{ADD_EXAMPLE}\n```"
    )


def added_text(item: Item) -> str:
    return "\n".join([
        "✅ Produk ditambahkan!",
        f"*Title:* {escape_md(item.title)}",
        f"*Slug:* {_code(as_text(item.slug) or '-')}",
        f"*Price:* {escape_md(item.price) or '-'}",
        f"*Gender:* {escape_md(item.gender) or '-'}",
        f"*Link:* {escape_md(item.aff)}",
    ])


def list_text(items: List[Item]) -> str:
    if not items:
        return "Belum ada produk."
    lines = [f"*{len(items)} produk terbaru:*"]
    for i, item in enumerate(items, 1):
        price = f" — {escape_md(item.price)}" if as_text(item.price) else ""
        lines.append(f"{i}. {escape_md(item.title)}{price}\n   {_code(as_text(item.slug) or '-')}")
    return "\n".join(lines)


def _code(text: Any) -> str:
    return "`" + as_text(text).replace("`", "'") + "`"


def deleted_text(slug: str, count: int) -> str:
    return f"🗑️ {count} produk dengan slug {_code(slug)} dihapus."


def not_found_text(slug: str) -> str:
    return f"Produk dengan slug {_code(slug)} tidak ditemukan."


DELETE_USAGE = "Format: /delete <slug>\nLihat slug dengan /list."

SAVE_FAILED = "❌ Gagal menyimpan produk (server error)."
DELETE_FAILED = "❌ Gagal menghapus produk (server error)."
