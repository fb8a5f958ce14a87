"""Avatar URLs for comment authors."""

import hashlib
from typing import Optional
from urllib.parse import urlencode

AVATAR_SIZE = 150
_GRAVATAR_BASE = "https://secure.gravatar.com/avatar/"
# Hash Gravatar serves the "mystery person" silhouette for.
_MYSTERY_HASH = "5cf23001579ee91aff54a2dcd6e5acc9"


def gravatar_url(email: Optional[str], size: int = AVATAR_SIZE) -> str:
    """Return the Gravatar URL for *email*, or the mystery-person avatar when unknown."""
    address = (email or "").strip().lower()
    digest = hashlib.md5(address.encode("utf-8")).hexdigest() if address else _MYSTERY_HASH
    return f"{_GRAVATAR_BASE}{digest}?{urlencode({'s': size, 'd': 'mm', 'r': 'g'})}"
