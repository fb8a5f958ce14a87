"""Backend/frontend URL substitution helpers."""

import re
from typing import Optional

from headless_core.models.config import FrontendConfig, SiteContext


def contains(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test. An empty *needle* never matches."""
    return bool(needle) and needle.lower() in haystack.lower()


def replace_ci(text: str, old: str, new: str) -> str:
    """Replace every case-insensitive occurrence of *old* in *text* with *new*."""
    if not old:
        return text
    return re.sub(re.escape(old), lambda _match: new, text, flags=re.IGNORECASE)


def to_frontend(url: str, backend_base: str, frontend_base: str) -> str:
    """Point *url* at the frontend. Strings without *backend_base* come back unchanged."""
    return replace_ci(url, backend_base, frontend_base)


def to_backend(url: str, backend_base: str, frontend_base: str) -> str:
    """Inverse of :func:`to_frontend`."""
    return replace_ci(url, frontend_base, backend_base)


def strip_base(url: str, base: str) -> Optional[str]:
    """Return *url* relative to *base*, or *None* when *base* does not occur in it."""
    if not contains(url, base):
        return None
    return replace_ci(url, base, "")


def home_url(
    path: str,
    config: FrontendConfig,
    site: SiteContext,
    scheme: Optional[str] = None,
    is_admin: bool = False,
) -> str:
    """Build a home URL for *path*.

    Inside the admin area the home URL points at the frontend so that
    "View" links and permalinks shown to editors open the headless site.
    REST-scheme URLs and public requests keep the backend home URL.
    """
    backend = f"{site.home_url}/{path.lstrip('/')}" if path else site.home_url

    if not config.is_configured or scheme == "rest" or not is_admin:
        return backend

    if not path:
        return config.base_url or ""

    return f"{config.root_url}{path.lstrip('/')}"
