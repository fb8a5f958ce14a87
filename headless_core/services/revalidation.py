"""On-demand cache revalidation of frontend pages."""

import logging
from typing import Optional

import httpx

from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.models.content import ContentItem
from headless_core.models.revalidation import RevalidationRequest
from headless_core.services import rewriter

logger = logging.getLogger(__name__)

REVALIDATE_PATH = "api/wordpress/revalidate"
TIMEOUT = 10  # seconds


def frontend_slug(item: ContentItem, config: FrontendConfig, site: SiteContext) -> Optional[str]:
    """Path of *item* on the frontend, without the leading slash.

    The permalink is taken the way editors see it in the admin area, where
    the home URL points at the frontend, then the frontend base is stripped.
    Returns *None* when the permalink does not live under the frontend.
    """
    path = rewriter.strip_base(item.permalink, site.home_url)
    if path is None:
        return None

    permalink = rewriter.home_url(path, config, site, is_admin=True)
    return rewriter.strip_base(permalink, config.root_url)


async def _post_json(
    url: str,
    payload: RevalidationRequest,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """POST *payload* as JSON and return the response status code."""
    async with httpx.AsyncClient(timeout=TIMEOUT, transport=transport) as client:
        resp = await client.post(
            url,
            content=payload.model_dump_json(),
            headers={"Content-Type": "application/json"},
        )
        return resp.status_code


async def revalidate(
    item: ContentItem,
    config: FrontendConfig,
    site: SiteContext,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """Ask the frontend to rebuild its cached rendering of *item*.

    Fire-and-forget: every failure is logged and reported as *False*, never
    raised, so the content edit that triggered it always goes through.
    """
    if not config.is_configured or not config.preview_secret_token:
        logger.warning("Missing constants for on demand revalidation.")
        return False

    if not item.id:
        logger.warning("Missing post ID for on demand revalidation.")
        return False

    slug = frontend_slug(item, config, site)
    if not slug:
        logger.warning("Missing post slug for on demand revalidation.", extra={"post_id": item.id})
        return False

    payload = RevalidationRequest(secret=config.preview_secret_token, slug=f"/{slug}")
    url = f"{config.root_url}{REVALIDATE_PATH}"

    try:
        status_code = await _post_json(url, payload, transport)
    except httpx.HTTPError as exc:
        logger.error("Failed to revalidate cache for post %s. (%s)", slug, exc)
        return False

    if status_code != 200:
        logger.error("Failed to revalidate cache for post %s.", slug)
        return False

    logger.info("Revalidated frontend cache", extra={"post_id": item.id, "slug": payload.slug})
    return True
