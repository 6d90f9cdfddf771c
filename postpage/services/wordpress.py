"""WordPress REST API client for posts and their related posts."""

import logging
from typing import List, Optional
from urllib.parse import urljoin

import httpx

from postpage.models.post import (
    Author,
    Category,
    FeaturedImage,
    OpenGraph,
    Post,
    RelatedPost,
    RelatedPosts,
)
from postpage.services.text import html_to_text

logger = logging.getLogger(__name__)

_WP_API_TIMEOUT = 15
_RELATED_FIELDS = "id,slug,title,sticky"


def _api_url(base_url: str, resource: str) -> str:
    return urljoin(base_url.rstrip("/") + "/", f"wp-json/wp/v2/{resource}")


def _rendered(field: Optional[dict]) -> str:
    return (field or {}).get("rendered", "")


def _first(items: Optional[list]) -> dict:
    return items[0] if items else {}


def _map_author(embedded: dict) -> Optional[Author]:
    author = _first(embedded.get("author"))
    # Private authors come back as an error object without a name
    if not author.get("name"):
        return None
    avatars = author.get("avatar_urls") or {}
    return Author(
        name=author["name"],
        slug=author.get("slug", ""),
        avatar_url=avatars.get("96") or next(iter(avatars.values()), None),
    )


def _map_featured_image(embedded: dict) -> Optional[FeaturedImage]:
    media = _first(embedded.get("wp:featuredmedia"))
    if not media.get("source_url"):
        return None
    details = media.get("media_details") or {}
    return FeaturedImage(
        source_url=media["source_url"],
        alt_text=media.get("alt_text") or None,
        caption=_rendered(media.get("caption")) or None,
        width=details.get("width"),
        height=details.get("height"),
    )


def _map_categories(embedded: dict) -> List[Category]:
    categories: List[Category] = []
    for group in embedded.get("wp:term") or []:
        for term in group:
            if term.get("taxonomy") == "category":
                categories.append(
                    Category(
                        database_id=term["id"],
                        name=html_to_text(term.get("name")),
                        slug=term["slug"],
                    )
                )
    return categories


def _item_to_post(item: dict) -> Post:
    """Convert a single embedded WordPress REST post item to a :class:`Post`.

    Yoast SEO's ``yoast_head_json`` block, when the plugin is installed,
    supplies the meta title, description and open-graph fields.
    """
    embedded = item.get("_embedded") or {}
    yoast = item.get("yoast_head_json") or {}

    og = None
    if yoast:
        og = OpenGraph(
            title=yoast.get("og_title"),
            description=yoast.get("og_description"),
            url=yoast.get("og_url"),
            type=yoast.get("og_type"),
            site_name=yoast.get("og_site_name"),
        )

    return Post(
        database_id=item["id"],
        slug=item["slug"],
        title=_rendered(item.get("title")),
        meta_title=yoast.get("title"),
        description=yoast.get("description"),
        excerpt=_rendered(item.get("excerpt")) or None,
        content=_rendered(item.get("content")),
        date=item["date"],
        modified=item.get("modified") or item["date"],
        author=_map_author(embedded),
        categories=_map_categories(embedded),
        featured_image=_map_featured_image(embedded),
        is_sticky=bool(item.get("sticky", False)),
        og=og,
    )


def _sort_sticky_first(items: List[dict]) -> List[dict]:
    sticky = [item for item in items if item.get("sticky")]
    regular = [item for item in items if not item.get("sticky")]
    return sticky + regular


async def get_post_by_slug(base_url: str, slug: str) -> Optional[Post]:
    """Return the post published under *slug*, or *None* when there is none.

    Network and HTTP errors are not handled here; they propagate to the caller.
    """
    api_url = _api_url(base_url, "posts")
    async with httpx.AsyncClient(timeout=_WP_API_TIMEOUT, follow_redirects=True) as client:
        resp = await client.get(api_url, params={"slug": slug, "_embed": 1})
        resp.raise_for_status()
        items = resp.json()

    if not items:
        logger.info("No WordPress post for slug %s", slug)
        return None
    return _item_to_post(items[0])


async def get_posts_by_category_id(
    base_url: str, category_id: int, exclude_id: int, count: int
) -> List[RelatedPost]:
    """Fetch up to *count* posts of a category, skipping *exclude_id*, sticky posts first."""
    api_url = _api_url(base_url, "posts")
    params = {
        "categories": category_id,
        "exclude": exclude_id,
        "per_page": count,
        "_fields": _RELATED_FIELDS,
    }
    async with httpx.AsyncClient(timeout=_WP_API_TIMEOUT, follow_redirects=True) as client:
        resp = await client.get(api_url, params=params)
        resp.raise_for_status()
        items = resp.json()

    return [
        RelatedPost(title=html_to_text(_rendered(item.get("title"))), slug=item["slug"])
        for item in _sort_sticky_first(items)
        if item.get("id") != exclude_id
    ][:count]


async def get_related_posts(
    base_url: str, categories: List[Category], post_id: int, count: int = 5
) -> Optional[RelatedPosts]:
    """Return posts related to *post_id* through its categories.

    Categories are tried in order and the first one with other posts wins.
    When none has any, the first category is returned with an empty list;
    a post without categories has no related posts at all.
    """
    if not categories:
        return None

    for category in categories:
        posts = await get_posts_by_category_id(base_url, category.database_id, post_id, count)
        if posts:
            return RelatedPosts(category=category, posts=posts)

    return RelatedPosts(category=categories[0], posts=[])
