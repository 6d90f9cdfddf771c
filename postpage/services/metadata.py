"""SEO metadata: page metadata from a post, ``<head>`` tags and JSON-LD."""

import re
from typing import List, Optional, Tuple

from postpage.models.metadata import (
    HeadSettings,
    LinkTag,
    MetaTag,
    PageMetadata,
    SiteMetadata,
    TwitterCard,
)
from postpage.models.post import OpenGraph, Post
from postpage.models.render_config import RenderConfig
from postpage.services.paths import post_path_by_slug
from postpage.services.text import html_to_text

_WHITESPACE_RE = re.compile(r"\s+")


def _collapse_whitespace(value: Optional[str]) -> str:
    return _WHITESPACE_RE.sub(" ", value or "").strip()


def page_metadata_from_post(post: Post, site: SiteMetadata, config: RenderConfig) -> PageMetadata:
    """Build the page metadata for *post* on top of the site defaults.

    The title comes from the SEO meta title. Without the SEO plugin every
    title variant becomes ``"{post title} - {site title}"``.
    """
    post_og = post.og or OpenGraph()
    post_title = html_to_text(post.title)
    description = post.description or post_og.description or f"Read more about {post_title}"
    title = post.meta_title

    url = post_og.url
    if not url and site.homepage:
        url = f"{site.homepage.rstrip('/')}{post_path_by_slug(post.slug)}"

    og = OpenGraph(site_name=site.title, type="article").model_copy(
        update=post_og.model_dump(exclude_none=True)
    )
    og = og.model_copy(update={"title": title, "description": description, "url": url})

    twitter = TwitterCard(
        title=title,
        description=description,
        image_url=og.image_url,
        username=site.twitter_username,
    )

    metadata = PageMetadata(
        title=title,
        description=description,
        canonical=url,
        language=site.language,
        og=og,
        twitter=twitter,
    )

    if not config.seo_plugin_enabled:
        metadata.title = f"{post_title} - {site.title}"
        metadata.og.title = metadata.title
        metadata.twitter.title = metadata.title

    return metadata


def head_settings_from_metadata(metadata: PageMetadata) -> HeadSettings:
    """Turn *metadata* into ``<head>`` tags, dropping any tag without content."""
    og = metadata.og
    twitter = metadata.twitter

    candidates: List[Tuple[str, str, object]] = [
        ("name", "description", _collapse_whitespace(metadata.description)),
        ("property", "og:title", og.title),
        ("property", "og:description", og.description),
        ("property", "og:url", og.url),
        ("property", "og:image", og.image_url),
        ("property", "og:image:secure_url", og.image_secure_url),
        ("property", "og:image:width", og.image_width),
        ("property", "og:image:height", og.image_height),
        ("property", "og:type", og.type or "website"),
        ("property", "og:site_name", og.site_name),
        ("property", "twitter:title", twitter.title),
        ("property", "twitter:description", twitter.description),
        ("property", "twitter:card", twitter.card_type),
        ("property", "twitter:image", twitter.image_url),
        ("property", "twitter:site", twitter.username),
        ("property", "twitter:creator", twitter.username),
    ]
    meta = [
        MetaTag(**{kind: key, "content": str(content)})
        for kind, key, content in candidates
        if content
    ]

    links = []
    if metadata.canonical:
        links.append(LinkTag(rel="canonical", href=metadata.canonical))

    return HeadSettings(title=metadata.title, html_lang=metadata.language, meta=meta, links=links)


def article_json_ld(post: Post, site: SiteMetadata) -> dict:
    """Return schema.org ``Article`` structured data for *post*."""
    homepage = site.homepage.rstrip("/")
    image = post.featured_image.source_url if post.featured_image else None
    return {
        "@context": "https://schema.org",
        "@type": "Article",
        "mainEntityOfPage": {"@type": "WebPage", "@id": homepage},
        "headline": html_to_text(post.title),
        "image": [image] if image else [],
        "datePublished": post.date.isoformat(),
        "dateModified": post.modified.isoformat(),
        "description": post.excerpt or "",
        "keywords": [", ".join(category.name for category in post.categories)],
        "copyrightYear": post.date.year,
        "author": {"@type": "Person", "name": post.author.name if post.author else None},
        "publisher": {
            "@type": "Organization",
            "name": site.title,
            "logo": {"@type": "ImageObject", "url": f"{homepage}/favicon.ico"},
        },
    }
