"""Redirect public (non-API) traffic from the backend to the headless frontend."""

import logging
from typing import Mapping, Optional

from pydantic import BaseModel

from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.services import rewriter

logger = logging.getLogger(__name__)

REDIRECT_STATUS = 302
REDIRECT_BY = "Headless Core"

_CRON_PATHS = ("/wp-cron.php",)
_REST_PREFIXES = ("/wp-json",)
_ADMIN_PREFIXES = ("/wp-admin",)
_GRAPHQL_PREFIXES = ("/graphql",)
_CUSTOMIZER_PARAMS = ("customize_changeset_uuid", "wp_customize")


class RequestInfo(BaseModel):
    """What the gate needs to know about an incoming request."""

    path: str
    query: str = ""
    is_cron: bool = False
    is_rest: bool = False
    is_admin: bool = False
    is_customize_preview: bool = False
    is_graphql: bool = False
    is_oauth: bool = False

    @property
    def request_uri(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path


def _has_prefix(path: str, prefixes) -> bool:
    return any(path == p or path.startswith(p + "/") for p in prefixes)


def build_request_info(path: str, query: str, params: Mapping[str, str]) -> RequestInfo:
    """Classify a request from its path and query parameters."""
    return RequestInfo(
        path=path,
        query=query,
        is_cron=path in _CRON_PATHS or "doing_wp_cron" in params,
        is_rest=_has_prefix(path, _REST_PREFIXES) or "rest_route" in params,
        is_admin=_has_prefix(path, _ADMIN_PREFIXES),
        is_customize_preview=any(p in params for p in _CUSTOMIZER_PARAMS),
        is_graphql=_has_prefix(path, _GRAPHQL_PREFIXES) or "graphql" in params,
        is_oauth=bool(params.get("rest_oauth1")),
    )


def _bypass(info: RequestInfo, config: FrontendConfig) -> bool:
    return (
        info.is_cron
        or info.is_rest
        or info.is_admin
        or info.is_customize_preview
        or info.is_graphql
        or info.is_oauth
        or not info.path
        or not config.is_configured
    )


def resolve_redirect(info: RequestInfo, config: FrontendConfig, site: SiteContext) -> Optional[str]:
    """Return the frontend URL to redirect *info* to, or *None* to serve it normally."""
    if _bypass(info, config):
        return None

    request_url = f"{site.home_url}/{info.request_uri.lstrip('/')}"

    # Media is served straight from the backend.
    if rewriter.contains(request_url, site.uploads_url):
        return None

    redirect_url = request_url.replace(f"{site.home_url}/", config.root_url, 1)
    logger.info("Redirecting public request", extra={"path": info.path, "location": redirect_url})
    return redirect_url
