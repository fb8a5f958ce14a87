from typing import Optional

from pydantic import BaseModel, Field

from headless_core.models.content import ContentResponse


class HomepageSettings(BaseModel):
    """Front page and posts archive page data."""

    frontPage: Optional[ContentResponse] = None
    postsPage: Optional[ContentResponse] = None


class AdditionalSettings(BaseModel):
    error404Page: Optional[ContentResponse] = None


class HeadlessConfigResponse(BaseModel):
    additionalSettings: AdditionalSettings


class Commenter(BaseModel):
    name: str = ""
    email: Optional[str] = None


class CommenterAvatar(BaseModel):
    gravatarUrl: str = Field(description="Avatar URL for the comment author.")
