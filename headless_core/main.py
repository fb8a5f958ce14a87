import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from headless_core.config import VERSION, load_frontend_config, load_site_context, options_path
from headless_core.routers.content import limiter, router as content_router
from headless_core.routers.headless import router as headless_router
from headless_core.services.access_gate import REDIRECT_BY, REDIRECT_STATUS, build_request_info, resolve_redirect
from headless_core.services.content_store import ContentPipeline, ContentRepository
from headless_core.services.settings_store import OptionStore, migrate_settings

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)


def reset_state(app: FastAPI) -> None:
    """Attach fresh option and content storage to *app*."""
    app.state.options = OptionStore(options_path())
    app.state.pipeline = ContentPipeline(ContentRepository())


@asynccontextmanager
async def lifespan(app: FastAPI):
    if migrate_settings(app.state.options, VERSION):
        logger.info("Headless settings migrated to version %s", VERSION)
    yield


app = FastAPI(
    title="Headless Core",
    description="Serves CMS content to a decoupled frontend and keeps its links and cache in step.",
    version=VERSION,
    docs_url="/wp-json/docs",
    redoc_url="/wp-json/redoc",
    openapi_url="/wp-json/openapi.json",
    lifespan=lifespan,
)
reset_state(app)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


@app.middleware("http")
async def deny_public_access(request: Request, call_next):
    """Send public page requests to the headless frontend; API traffic passes through."""
    info = build_request_info(request.url.path, request.url.query, request.query_params)
    redirect_url = resolve_redirect(info, load_frontend_config(request.app.state.options), load_site_context())
    if redirect_url is None:
        return await call_next(request)
    return RedirectResponse(
        redirect_url,
        status_code=REDIRECT_STATUS,
        headers={"X-Redirect-By": REDIRECT_BY},
    )


app.include_router(content_router)
app.include_router(headless_router)


@app.get("/wp-json/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from Headless Core"}
