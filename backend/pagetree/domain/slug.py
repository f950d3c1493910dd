import re
import unicodedata
from typing import Collection
from urllib.parse import quote, unquote

SEPARATOR = "-"
FALLBACK_SLUG = "page"

_NON_ASCII_WORD = re.compile(r"[^a-z0-9]+")
_NON_WORD = re.compile(r"[\W_]+", re.UNICODE)


def clean_override(value):
    """
    Normalizes an optional override field.
    Empty and whitespace-only strings count as absent.
    """
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def slugify_title(title: str) -> str:
    """
    Derives a URL-safe slug from a page title.

    - Diacritics are folded to ASCII ("spéciål" -> "special")
    - Titles with no Latin letters keep their words, percent-encoded
    - Never returns an empty string
    """
    normalized = unicodedata.normalize("NFKD", title or "")
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = _NON_ASCII_WORD.sub(SEPARATOR, ascii_text).strip(SEPARATOR)
    if slug:
        return slug

    unicode_text = unicodedata.normalize("NFKC", title or "").lower()
    slug = _NON_WORD.sub(SEPARATOR, unicode_text).strip(SEPARATOR)
    if slug:
        return quote(slug, safe=SEPARATOR)

    return FALLBACK_SLUG


def resolve_slug(page) -> str:
    custom_slug = clean_override(page.custom_slug)
    if custom_slug:
        return custom_slug
    return slugify_title(page.title)


def unique_slug(base: str, taken: Collection[str]) -> str:
    """
    Returns base, or base--N with the first free N >= 2.
    """
    if base not in taken:
        return base

    n = 2
    while f"{base}--{n}" in taken:
        n += 1
    return f"{base}--{n}"


def is_url_safe(slug: str) -> bool:
    """
    True when slug survives a request round trip: the router decodes
    the path and lookups re-encode it, so only canonical escapes pass.
    """
    if not slug or "/" in unquote(slug):
        return False
    return quote(unquote(slug), safe="-._~") == slug
