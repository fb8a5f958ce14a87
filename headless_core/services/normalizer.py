"""Text normalisation: title slugs and plain-text settings values."""

import re
import unicodedata

from bs4 import BeautifulSoup


def sanitize_title(title: str) -> str:
    """Turn a post title into a URL slug.

    The slug is lowercased, ASCII-only, and uses hyphens as separators.
    An empty or fully non-ASCII title yields an empty slug.
    """
    # Normalise unicode, keep only ASCII
    slug = unicodedata.normalize("NFKD", title)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    # Drop HTML tags and entities that editors sometimes leave in titles
    slug = re.sub(r"<[^>]*>", "", slug)
    slug = re.sub(r"&[a-z0-9#]+;", "", slug, flags=re.IGNORECASE)

    # Lowercase and replace runs of non-alphanumeric chars with a single hyphen
    slug = re.sub(r"[^a-z0-9_]+", "-", slug.lower())
    return slug.strip("-")


def sanitize_text_field(value: object) -> str:
    """Reduce a form value to a single line of plain text.

    HTML tags are removed, line breaks, tabs and runs of whitespace collapse
    to one space, and the result is trimmed.
    """
    text = "" if value is None else str(value)
    if "<" in text:
        text = BeautifulSoup(text, "lxml").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()
