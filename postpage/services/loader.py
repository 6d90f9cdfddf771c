"""Server-side data loading for the post page."""

import logging
from typing import Optional

from postpage.models.page import PageLoadResult, PostPageProps, RelatedSection, RelatedTitle
from postpage.services.paths import category_path_by_slug
from postpage.services.wordpress import get_post_by_slug, get_related_posts
from postpage.settings import Settings

logger = logging.getLogger(__name__)


async def load_post_page(slug: str, referer: Optional[str], settings: Settings) -> PageLoadResult:
    """Resolve the props for ``/posts/{slug}``.

    Fetch errors from WordPress propagate to the caller.
    """
    if referer is not None and referer == settings.redirect_referer:
        target = f"{settings.wordpress_redirect_domain}/{slug}/"
        logger.info("Redirecting referral visit for %s to %s", slug, target)
        return PageLoadResult(redirect_url=target)

    post = await get_post_by_slug(settings.wordpress_api_url, slug)
    if post is None:
        logger.info("Post not found: %s", slug)
        return PageLoadResult(not_found=True)

    props = PostPageProps(post=post)

    related = await get_related_posts(
        settings.wordpress_api_url,
        post.categories,
        post.database_id,
        settings.related_posts_count,
    )
    if related and related.category and related.posts:
        props.related = RelatedSection(
            posts=related.posts,
            title=RelatedTitle(
                name=related.category.name or None,
                link=category_path_by_slug(related.category.slug),
            ),
        )

    return PageLoadResult(props=props)
