# utils/slug.py
import re
import unicodedata

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def slugify(name):
    """
    Turn a display name into a URL-safe token.

    "Siti Nurhaliza" -> "siti-nurhaliza", "José" -> "jose".
    Punctuation-only input gives "" and the caller picks a fallback.
    """
    decomposed = unicodedata.normalize('NFKD', name.lower())
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub('-', stripped).strip('-')


def ensure_unique_slug(base, used):
    """Return ``base`` or the first free ``base-2``, ``base-3``, ... (``used`` is not modified)."""
    slug = base
    counter = 2
    while slug in used:
        slug = f"{base}-{counter}"
        counter += 1
    return slug
