from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class HeadlessSettings(BaseModel):
    """Sanitised value of the ``headless_config`` option."""

    model_config = ConfigDict(extra="allow")

    error_404_page: Optional[int] = Field(
        default=None,
        ge=0,
        description="ID of the page whose content the frontend renders as its 404 page.",
    )


class SettingsUpdateRequest(BaseModel):
    """Raw settings form input. Values are sanitised before they are stored."""

    settings: Dict[str, object] = Field(default_factory=dict)
