"""HTML rendering of the post page."""

import json
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from postpage.models.metadata import SiteMetadata
from postpage.models.page import PostPageProps
from postpage.models.post import OpenGraph, Post
from postpage.models.render_config import RenderConfig
from postpage.services.ads import END_PLACEHOLDER_ID, CONTENT_CONTAINER_ID, apply_ad_passes
from postpage.services.dates import format_date
from postpage.services.metadata import (
    article_json_ld,
    head_settings_from_metadata,
    page_metadata_from_post,
)
from postpage.services.paths import category_path_by_slug, post_path_by_slug

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Social cards are always advertised at 2:1, whatever the uploaded image size
OG_IMAGE_WIDTH = 2000
OG_IMAGE_HEIGHT = 1000

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.update(
    post_path_by_slug=post_path_by_slug,
    category_path_by_slug=category_path_by_slug,
    format_date=format_date,
)


def trusted_html(value: Optional[str]) -> Markup:
    """Mark CMS-provided HTML as safe so the template emits it unescaped.

    Post titles, bodies and captions are written by the site's editors in
    WordPress and are trusted; visitor input must never pass through here.
    """
    return Markup(value or "")


def _json_ld_script(data: dict) -> Markup:
    # "</" would end the surrounding <script> element early
    return Markup(json.dumps(data, ensure_ascii=False).replace("</", "<\\/"))


def normalize_og(post: Post) -> Post:
    """Ensure ``post.og`` exists and carries the featured image for social cards."""
    if post.og is None:
        post.og = OpenGraph()

    image_url = post.featured_image.source_url if post.featured_image else None
    post.og.image_url = image_url
    post.og.image_secure_url = image_url
    post.og.image_width = OG_IMAGE_WIDTH
    post.og.image_height = OG_IMAGE_HEIGHT
    return post


def render_post_page(props: PostPageProps, config: RenderConfig, site: SiteMetadata) -> str:
    """Render the full post page and run the ad passes over the result."""
    post = normalize_og(props.post)
    metadata = page_metadata_from_post(post, site, config)
    head = head_settings_from_metadata(metadata)

    html = templates.get_template("post.html").render(
        head=head,
        site=site,
        post=post,
        title_html=trusted_html(post.title),
        content_html=trusted_html(post.content),
        caption_html=trusted_html(post.featured_image.caption) if post.featured_image else None,
        json_ld=_json_ld_script(article_json_ld(post, site)),
        related=props.related,
        content_container_id=CONTENT_CONTAINER_ID,
        end_placeholder_id=END_PLACEHOLDER_ID,
    )
    return apply_ad_passes(html, config)


def render_status_page(template_name: str, site: SiteMetadata, **context) -> str:
    """Render a standalone status page such as the not-found page."""
    return templates.get_template(template_name).render(site=site, **context)
