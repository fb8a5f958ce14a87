from typing import Literal

from pydantic import BaseModel, Field

ContentStatus = Literal["draft", "publish", "pending", "private", "future", "trash"]


class ContentItem(BaseModel):
    """A single stored post, page or custom-type entry."""

    id: int
    type_name: str
    slug: str = ""
    title: str = ""
    status: ContentStatus = "draft"
    content: str = ""
    permalink: str = ""


class ContentWriteRequest(BaseModel):
    title: str = ""
    slug: str = ""
    status: ContentStatus = "draft"
    content: str = ""


class ContentResponse(BaseModel):
    """REST serialisation of a content item, with the externally visible link."""

    id: int
    type: str
    slug: str
    status: ContentStatus
    title: str
    content: str
    link: str


class PreviewLinkResponse(BaseModel):
    id: int
    preview_link: str = Field(description="Preview URL the editor's preview button should open.")
