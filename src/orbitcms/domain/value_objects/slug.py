"""URL-safe slug normalization for pages."""

import re
import unicodedata

SLUG_MAX_LENGTH = 100

# Characters dropped outright before the strict pass
_REMOVED_CHARS = re.compile(r"[*+~.()'\"!:@]")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s-]+")


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Normalize text into a lowercase, hyphenated, ASCII-only slug.

    Accents are transliterated ("Café" -> "cafe"), punctuation is stripped and
    whitespace/hyphen runs collapse into a single hyphen. Idempotent: slugify of a
    slug returns the same slug. Returns "" when nothing slug-worthy remains.

    Example:
        >>> slugify("Hello, World! Part 2")
        'hello-world-part-2'
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    cleaned = _REMOVED_CHARS.sub("", ascii_text).lower()
    cleaned = _NON_SLUG_CHARS.sub("", cleaned)
    cleaned = _SEPARATOR_RUNS.sub("-", cleaned).strip("-")
    return cleaned[:max_length].rstrip("-")
