import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from headless_core.dependencies import get_config, get_pipeline, get_repository, get_site
from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.models.content import ContentItem, ContentResponse, ContentWriteRequest
from headless_core.services.content_store import ContentPipeline, ContentRepository
from headless_core.services.headless import serialize

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/wp-json/wp/v2", tags=["content"])

# REST collection name -> internal type name
_REST_BASES = {
    "posts": "post",
    "pages": "page",
}


@router.get("/{rest_base}/{item_id}", response_model=ContentResponse, summary="Get a post or page")
async def get_item(
    rest_base: str,
    item_id: int,
    repository: ContentRepository = Depends(get_repository),
    config: FrontendConfig = Depends(get_config),
    site: SiteContext = Depends(get_site),
) -> ContentResponse:
    """Return the item with its ``link`` pointing at the headless frontend."""
    item = _find(repository, rest_base, item_id)
    return serialize(item, config, site)


@router.post(
    "/{rest_base}",
    response_model=ContentResponse,
    status_code=201,
    summary="Create a post or page",
)
@limiter.limit("30/minute")
async def create_item(
    request: Request,
    rest_base: str,
    body: ContentWriteRequest,
    pipeline: ContentPipeline = Depends(get_pipeline),
    config: FrontendConfig = Depends(get_config),
    site: SiteContext = Depends(get_site),
) -> ContentResponse:
    type_name = _type_name(rest_base)
    item = ContentItem(id=pipeline.repository.allocate_id(), type_name=type_name, **body.model_dump())
    saved = await pipeline.save(item, config, site)
    logger.info("Created %s %d", type_name, saved.id)
    return serialize(saved, config, site)


@router.post(
    "/{rest_base}/{item_id}",
    response_model=ContentResponse,
    summary="Update a post or page",
    description=(
        "Stores the new values, rewrites backend links in the content body to "
        "the frontend domain and asks the frontend to revalidate the item's page."
    ),
)
@limiter.limit("30/minute")
async def update_item(
    request: Request,
    rest_base: str,
    item_id: int,
    body: ContentWriteRequest,
    pipeline: ContentPipeline = Depends(get_pipeline),
    config: FrontendConfig = Depends(get_config),
    site: SiteContext = Depends(get_site),
) -> ContentResponse:
    existing = _find(pipeline.repository, rest_base, item_id)
    saved = await pipeline.save(existing.model_copy(update=body.model_dump(exclude_unset=True)), config, site)
    return serialize(saved, config, site)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _type_name(rest_base: str) -> str:
    try:
        return _REST_BASES[rest_base]
    except KeyError:
        raise HTTPException(status_code=404, detail="No route was found matching the URL.")


def _find(repository: ContentRepository, rest_base: str, item_id: int) -> ContentItem:
    type_name = _type_name(rest_base)
    item = repository.get(item_id)
    if item is None or item.type_name != type_name:
        raise HTTPException(status_code=404, detail="Invalid post ID.")
    return item
