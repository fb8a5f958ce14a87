"""FastAPI dependencies that hand request-scoped state to the routers."""

from fastapi import Depends, Request

from headless_core.config import load_frontend_config, load_site_context
from headless_core.models.config import FrontendConfig, SiteContext
from headless_core.services.content_store import ContentPipeline, ContentRepository
from headless_core.services.settings_store import OptionStore


def get_options(request: Request) -> OptionStore:
    return request.app.state.options


def get_repository(request: Request) -> ContentRepository:
    return request.app.state.pipeline.repository


def get_pipeline(request: Request) -> ContentPipeline:
    return request.app.state.pipeline


def get_site() -> SiteContext:
    return load_site_context()


def get_config(store: OptionStore = Depends(get_options)) -> FrontendConfig:
    return load_frontend_config(store)
