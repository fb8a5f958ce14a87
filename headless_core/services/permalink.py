"""Externally visible links for serialised content items."""

import logging
from typing import Mapping, Optional

from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.models.content import ContentItem
from headless_core.services import rewriter
from headless_core.services.preview import backend_preview_link, preview_link

logger = logging.getLogger(__name__)


def override_link(
    item: ContentItem,
    config: FrontendConfig,
    site: SiteContext,
    type_names: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the link the API should report for *item*.

    * ``draft``   – the frontend preview link.
    * ``publish`` – the frontend permalink, or ``<frontend>/404`` for the
      configured error page.
    * anything else – the stored permalink, untouched.
    """
    if item.status == "draft":
        return preview_link(item, config, backend_preview_link(item, site.home_url), type_names)

    if item.status != "publish" or not config.is_configured:
        return item.permalink

    base_url = config.trimmed_url

    if config.error_404_page and item.id == config.error_404_page:
        return f"{base_url}/404"

    # Externally hosted permalinks are reported as they are.
    if not rewriter.contains(item.permalink, site.site_url):
        logger.debug("Permalink %s is not on the backend site; leaving it", item.permalink)
        return item.permalink

    return rewriter.to_frontend(item.permalink, site.site_url, base_url)
