"""Read-side extensions for the frontend: homepage and headless settings."""

from typing import Mapping, Optional

from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.models.content import ContentItem, ContentResponse
from headless_core.models.headless import AdditionalSettings, HeadlessConfigResponse, HomepageSettings
from headless_core.services.content_store import ContentRepository
from headless_core.services.permalink import override_link
from headless_core.services.settings_store import OptionStore, parse_content_id


def serialize(
    item: ContentItem,
    config: FrontendConfig,
    site: SiteContext,
    type_names: Optional[Mapping[str, str]] = None,
) -> ContentResponse:
    """REST representation of *item* with its frontend-facing link."""
    return ContentResponse(
        id=item.id,
        type=item.type_name,
        slug=item.slug,
        status=item.status,
        title=item.title,
        content=item.content,
        link=override_link(item, config, site, type_names),
    )


def _load_page(
    repository: ContentRepository,
    value: object,
    config: FrontendConfig,
    site: SiteContext,
) -> Optional[ContentResponse]:
    page_id = parse_content_id(value)
    if not page_id:
        return None
    item = repository.get(page_id)
    return serialize(item, config, site) if item else None


def homepage_settings(
    repository: ContentRepository,
    store: OptionStore,
    config: FrontendConfig,
    site: SiteContext,
) -> HomepageSettings:
    return HomepageSettings(
        frontPage=_load_page(repository, store.get("page_on_front"), config, site),
        postsPage=_load_page(repository, store.get("page_for_posts"), config, site),
    )


def headless_config(
    repository: ContentRepository,
    config: FrontendConfig,
    site: SiteContext,
) -> HeadlessConfigResponse:
    return HeadlessConfigResponse(
        additionalSettings=AdditionalSettings(
            error404Page=_load_page(repository, config.error_404_page, config, site),
        )
    )
