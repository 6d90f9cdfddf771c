from typing import List, Optional

from pydantic import BaseModel, Field

from postpage.models.post import OpenGraph


class SiteMetadata(BaseModel):
    """Site-wide defaults merged into every page's metadata."""

    title: str
    description: str = ""
    language: str = "en"
    homepage: str = ""
    twitter_username: Optional[str] = None


class TwitterCard(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    card_type: str = "summary_large_image"
    image_url: Optional[str] = None
    username: Optional[str] = None


class PageMetadata(BaseModel):
    title: Optional[str] = None
    description: str = ""
    canonical: Optional[str] = None
    language: str = "en"
    og: OpenGraph = Field(default_factory=OpenGraph)
    twitter: TwitterCard = Field(default_factory=TwitterCard)


class MetaTag(BaseModel):
    name: Optional[str] = None
    property: Optional[str] = None
    content: str


class LinkTag(BaseModel):
    rel: str
    href: str


class HeadSettings(BaseModel):
    """Everything the page ``<head>`` needs, ready for the template."""

    title: Optional[str] = None
    html_lang: str = "en"
    meta: List[MetaTag] = Field(default_factory=list)
    links: List[LinkTag] = Field(default_factory=list)
