# helpers.py
# Small text helpers used when building recipe titles and slugs.

import re
import secrets
import string
import unicodedata

from app.core.config import settings

_ALPHABET = string.ascii_lowercase + string.digits


def generate_random_string(length: int | None = None) -> str:
    """
    Return a random lowercase alphanumeric token.
    Appended to titles and slugs so that two recipes with the same title
    are unlikely to share a slug. It is not a uniqueness guarantee.
    """
    length = length or settings.RANDOM_SUFFIX_LENGTH
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def slug_generator(text: str | None) -> str:
    """
    Turn a title into a URL-safe slug: ASCII, lowercase, hyphen separated.
    "Crème Brûlée (easy!)" -> "creme-brulee-easy"
    """
    if not text:
        return ""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower())
    return slug.strip("-")
