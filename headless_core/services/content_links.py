"""Rewrite backend links inside stored content so they point at the frontend."""

import logging
from typing import Optional

from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.services import rewriter

logger = logging.getLogger(__name__)


def migrate_content_links(content: str, config: FrontendConfig, site: SiteContext) -> Optional[str]:
    """Return *content* with backend links pointing at the frontend.

    Uploaded media and plugin assets keep resolving against the backend: after
    the body-wide substitution their URLs are reverted to the backend domain.

    Returns *None* when there is nothing to write: no frontend configured, no
    backend link in the body, or a rewrite that changes nothing.
    """
    if not config.is_configured:
        return None

    backend_domain = site.site_url

    # Cheap pre-check; also what makes a second pass a no-op.
    if not rewriter.contains(content, backend_domain):
        return None

    frontend_domain = config.trimmed_url
    new_content = rewriter.to_frontend(content, backend_domain, frontend_domain)

    # Revert media and plugin asset links.
    for asset_path in (site.uploads_path, site.plugins_path):
        new_content = rewriter.replace_ci(
            new_content,
            f"{frontend_domain}{asset_path}",
            f"{backend_domain}{asset_path}",
        )

    if new_content == content:
        return None

    logger.debug("Rewrote backend links in content body", extra={"backend": backend_domain})
    return new_content
