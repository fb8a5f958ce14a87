import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from headless_core.dependencies import get_config, get_options, get_repository, get_site
from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.models.content import PreviewLinkResponse
from headless_core.models.headless import Commenter, CommenterAvatar, HeadlessConfigResponse, HomepageSettings
from headless_core.models.settings import HeadlessSettings, SettingsUpdateRequest
from headless_core.routers.content import limiter
from headless_core.services import headless
from headless_core.services.avatar import gravatar_url
from headless_core.services.content_store import ContentRepository
from headless_core.services.preview import backend_preview_link, preview_link
from headless_core.services.settings_store import OptionStore, load_settings, save_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wp-json/headless/v1", tags=["headless"])


@router.get("/preview-link/{item_id}", response_model=PreviewLinkResponse, summary="Preview link for an item")
async def get_preview_link(
    item_id: int,
    repository: ContentRepository = Depends(get_repository),
    config: FrontendConfig = Depends(get_config),
    site: SiteContext = Depends(get_site),
) -> PreviewLinkResponse:
    item = repository.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Invalid post ID.")
    link = preview_link(item, config, backend_preview_link(item, site.home_url))
    return PreviewLinkResponse(id=item.id, preview_link=link)


@router.get("/settings", response_model=HeadlessSettings, summary="Read headless settings")
async def get_settings(store: OptionStore = Depends(get_options)) -> HeadlessSettings:
    return load_settings(store)


@router.put("/settings", response_model=HeadlessSettings, summary="Update headless settings")
@limiter.limit("10/minute")
async def put_settings(
    request: Request,
    body: SettingsUpdateRequest,
    store: OptionStore = Depends(get_options),
) -> HeadlessSettings:
    """Sanitise and store the settings form input, replacing the previous values."""
    settings = save_settings(store, body.settings)
    logger.info("Headless settings updated", extra={"keys": sorted(body.settings)})
    return settings


@router.get("/homepage-settings", response_model=HomepageSettings, summary="Front and posts archive page data")
async def get_homepage_settings(
    repository: ContentRepository = Depends(get_repository),
    store: OptionStore = Depends(get_options),
    config: FrontendConfig = Depends(get_config),
    site: SiteContext = Depends(get_site),
) -> HomepageSettings:
    return headless.homepage_settings(repository, store, config, site)


@router.get("/headless-config", response_model=HeadlessConfigResponse, summary="Headless config")
async def get_headless_config(
    repository: ContentRepository = Depends(get_repository),
    config: FrontendConfig = Depends(get_config),
    site: SiteContext = Depends(get_site),
) -> HeadlessConfigResponse:
    return headless.headless_config(repository, config, site)


@router.post("/commenter-avatar", response_model=CommenterAvatar, summary="Avatar URL for a comment author")
async def commenter_avatar(body: Commenter) -> CommenterAvatar:
    return CommenterAvatar(gravatarUrl=gravatar_url(body.email))
