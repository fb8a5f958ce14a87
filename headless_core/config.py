"""Environment-driven configuration.

Values are read on every call so that a request always sees one consistent
snapshot, and tests can change the environment between requests.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from headless_core.models.config import FrontendConfig, SiteContext, trim_trailing_slash
from headless_core.services.settings_store import OptionStore, load_settings

load_dotenv()

VERSION = "2.0.1"

DEFAULT_SITE_URL = "http://localhost:8000"


def _env(name: str) -> Optional[str]:
    """Return the environment variable *name*; blank values count as unset."""
    value = os.getenv(name, "").strip()
    return value or None


def load_site_context() -> SiteContext:
    site_url = trim_trailing_slash(_env("HEADLESS_SITE_URL") or DEFAULT_SITE_URL)
    return SiteContext(
        site_url=site_url,
        home_url=trim_trailing_slash(_env("HEADLESS_HOME_URL") or site_url),
        uploads_url=trim_trailing_slash(_env("HEADLESS_UPLOADS_URL") or f"{site_url}/wp-content/uploads"),
        plugins_url=trim_trailing_slash(_env("HEADLESS_PLUGINS_URL") or f"{site_url}/wp-content/plugins"),
    )


def load_frontend_config(store: OptionStore) -> FrontendConfig:
    settings = load_settings(store)
    return FrontendConfig(
        base_url=_env("HEADLESS_FRONTEND_URL"),
        preview_secret_token=_env("PREVIEW_SECRET_TOKEN"),
        error_404_page=settings.error_404_page,
    )


def options_path() -> Optional[str]:
    return _env("HEADLESS_OPTIONS_PATH")
