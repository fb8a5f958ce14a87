from typing import Optional

from pydantic import BaseModel, ConfigDict


class FrontendConfig(BaseModel):
    """Headless frontend settings, loaded once per request."""

    model_config = ConfigDict(frozen=True)

    base_url: Optional[str] = None
    preview_secret_token: Optional[str] = None
    error_404_page: Optional[int] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    @property
    def trimmed_url(self) -> str:
        """Frontend base with exactly one trailing slash removed."""
        return trim_trailing_slash(self.base_url or "")

    @property
    def root_url(self) -> str:
        """Slash-terminated frontend base, used to build endpoint URLs."""
        return f"{self.trimmed_url}/"

    @property
    def token(self) -> str:
        return self.preview_secret_token or ""


class SiteContext(BaseModel):
    """Addresses of the backend site itself. Stored without a trailing slash."""

    model_config = ConfigDict(frozen=True)

    site_url: str
    home_url: str
    uploads_url: str
    plugins_url: str

    @property
    def uploads_path(self) -> str:
        """Upload base URL with the backend domain stripped, e.g. ``/wp-content/uploads``."""
        return _relative_to(self.uploads_url, self.site_url)

    @property
    def plugins_path(self) -> str:
        return _relative_to(self.plugins_url, self.site_url)


def _relative_to(url: str, base: str) -> str:
    if url.lower().startswith(base.lower()):
        return url[len(base):]
    return url


def trim_trailing_slash(url: str) -> str:
    """Strip exactly one trailing slash from *url*."""
    return url[:-1] if url.endswith("/") else url
