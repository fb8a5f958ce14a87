"""Content storage and the event pipeline that runs on every write."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, FrozenSet, Optional, Type, Union

from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.models.content import ContentItem
from headless_core.services.content_links import migrate_content_links
from headless_core.services.normalizer import sanitize_title
from headless_core.services.revalidation import revalidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentEdited:
    """An existing item changed (body, status, meta, terms or comments)."""

    item: ContentItem


@dataclass(frozen=True)
class ContentSaved:
    """An item was written, whether created or updated."""

    item: ContentItem


ContentEvent = Union[ContentEdited, ContentSaved]
EventTypes = FrozenSet[Type]

Notifier = Callable[[ContentItem, FrontendConfig, SiteContext], Awaitable[bool]]


def build_permalink(item: ContentItem, site: SiteContext) -> str:
    """Canonical backend permalink. Unpublished items use the query-string form."""
    if item.status == "publish" and item.slug:
        return f"{site.home_url}/{item.slug}/"
    key = "page_id" if item.type_name == "page" else "p"
    return f"{site.home_url}/?{key}={item.id}"


class ContentRepository:
    """In-memory content storage keyed by item id."""

    def __init__(self) -> None:
        self._items: Dict[int, ContentItem] = {}
        self._next_id = 1

    def get(self, item_id: int) -> Optional[ContentItem]:
        return self._items.get(item_id)

    def allocate_id(self) -> int:
        item_id = self._next_id
        self._next_id += 1
        return item_id

    def put(self, item: ContentItem) -> ContentItem:
        self._items[item.id] = item
        self._next_id = max(self._next_id, item.id + 1)
        return item


class ContentPipeline:
    """Persists content items and dispatches the resulting events.

    ``ContentEdited`` triggers frontend revalidation, ``ContentSaved``
    triggers the content link migrator. A write may pass event types in
    *suppress*; those events are not dispatched for that write.
    """

    def __init__(self, repository: ContentRepository, notifier: Notifier = revalidate) -> None:
        self.repository = repository
        self.notifier = notifier

    async def save(
        self,
        item: ContentItem,
        config: FrontendConfig,
        site: SiteContext,
        suppress: EventTypes = frozenset(),
    ) -> ContentItem:
        is_update = self.repository.get(item.id) is not None

        if item.status == "publish" and not item.slug:
            item = item.model_copy(update={"slug": sanitize_title(item.title) or str(item.id)})
        item = item.model_copy(update={"permalink": build_permalink(item, site)})

        stored = self.repository.put(item)
        logger.info(
            "Content saved",
            extra={"post_id": stored.id, "status": stored.status, "update": is_update},
        )

        if is_update:
            await self.dispatch(ContentEdited(stored), config, site, suppress)
        await self.dispatch(ContentSaved(stored), config, site, suppress)

        return self.repository.get(stored.id) or stored

    async def dispatch(
        self,
        event: ContentEvent,
        config: FrontendConfig,
        site: SiteContext,
        suppress: EventTypes = frozenset(),
    ) -> None:
        if type(event) in suppress:
            return

        if isinstance(event, ContentEdited):
            await self.notifier(event.item, config, site)
        elif isinstance(event, ContentSaved):
            await self._override_links(event.item, config, site, suppress)

    async def _override_links(
        self,
        item: ContentItem,
        config: FrontendConfig,
        site: SiteContext,
        suppress: EventTypes,
    ) -> None:
        new_content = migrate_content_links(item.content, config, site)
        if new_content is None:
            return

        # The rewrite is itself a save; keep it from re-entering this handler.
        await self.save(
            item.model_copy(update={"content": new_content}),
            config,
            site,
            suppress=suppress | {ContentSaved},
        )
