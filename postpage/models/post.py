from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Author(BaseModel):
    name: str
    slug: str = ""
    avatar_url: Optional[str] = None


class Category(BaseModel):
    database_id: int
    name: str
    slug: str


class FeaturedImage(BaseModel):
    source_url: str
    alt_text: Optional[str] = None
    caption: Optional[str] = None  # rendered HTML from WordPress
    width: Optional[int] = None
    height: Optional[int] = None


class OpenGraph(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    site_name: Optional[str] = None
    image_url: Optional[str] = None
    image_secure_url: Optional[str] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None


class Post(BaseModel):
    """A single WordPress post as consumed by the post page."""

    database_id: int
    slug: str
    title: str  # rendered HTML
    meta_title: Optional[str] = None
    description: Optional[str] = None
    excerpt: Optional[str] = None
    content: str  # rendered HTML
    date: datetime
    modified: datetime
    author: Optional[Author] = None
    categories: List[Category] = Field(default_factory=list)
    featured_image: Optional[FeaturedImage] = None
    is_sticky: bool = False
    og: Optional[OpenGraph] = None


class RelatedPost(BaseModel):
    title: str
    slug: str


class RelatedPosts(BaseModel):
    """Result of a related-posts lookup: the category used and its posts."""

    category: Optional[Category] = None
    posts: List[RelatedPost] = Field(default_factory=list)
