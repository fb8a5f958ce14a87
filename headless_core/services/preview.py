"""Preview links that open drafts on the headless frontend."""

from typing import Mapping, Optional
from urllib.parse import urlencode

from headless_core.models.config import FrontendConfig
from headless_core.models.content import ContentItem
from headless_core.services.normalizer import sanitize_title

# Internal type name -> type identifier the frontend queries with.
DEFAULT_TYPE_NAMES = {
    "post": "post",
    "page": "page",
}


def external_type_name(type_name: str, type_names: Optional[Mapping[str, str]] = None) -> str:
    """Return the externally registered name for *type_name*, or the raw name."""
    registry = DEFAULT_TYPE_NAMES if type_names is None else type_names
    return registry.get(type_name) or type_name


def preview_link(
    item: ContentItem,
    config: FrontendConfig,
    backend_link: str,
    type_names: Optional[Mapping[str, str]] = None,
) -> str:
    """Build the frontend preview URL for *item*.

    Format: ``<frontend>/api/preview?name=<slug>&id=<id>&post_type=<type>&token=<token>``.
    Without a configured frontend the backend's own *backend_link* is returned.
    """
    if not config.is_configured:
        return backend_link

    slug = item.slug if item.slug else sanitize_title(item.title)
    query = urlencode(
        {
            "name": slug,
            "id": item.id,
            "post_type": external_type_name(item.type_name, type_names),
            "token": config.token,
        }
    )
    return f"{config.root_url}api/preview?{query}"


def backend_preview_link(item: ContentItem, home_url: str) -> str:
    """The backend's default preview URL, used when no frontend is configured."""
    key = "page_id" if item.type_name == "page" else "p"
    return f"{home_url}/?{urlencode({key: item.id, 'preview': 'true'})}"
