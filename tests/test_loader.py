"""Tests for the post page loader: redirect, not-found and related posts."""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from postpage.models.post import Category, Post, RelatedPost, RelatedPosts
from postpage.services.loader import load_post_page
from postpage.settings import Settings

_SETTINGS = Settings(
    wordpress_api_url="https://cms.example.com",
    wordpress_redirect_domain="https://www.example.com",
    redirect_referer="https://l.facebook.com/",
    related_posts_count=5,
)

_TECH = Category(database_id=3, name="Tech", slug="tech")


def _post(**overrides) -> Post:
    fields = {
        "database_id": 42,
        "slug": "hello-world",
        "title": "Hello World",
        "content": "<p>Body</p>",
        "date": datetime(2024, 3, 5),
        "modified": datetime(2024, 4, 1),
        "categories": [_TECH],
    }
    fields.update(overrides)
    return Post(**fields)


def _load(slug="hello-world", referer=None, post=None, related=None):
    get_post = AsyncMock(return_value=post)
    get_related = AsyncMock(return_value=related)
    with (
        patch("postpage.services.loader.get_post_by_slug", new=get_post),
        patch("postpage.services.loader.get_related_posts", new=get_related),
    ):
        result = asyncio.run(load_post_page(slug, referer, _SETTINGS))
    return result, get_post, get_related


class TestReferralRedirect:
    def test_sentinel_referer_redirects_without_fetching(self):
        result, get_post, get_related = _load(referer="https://l.facebook.com/", post=_post())

        assert result.redirect_url == "https://www.example.com/hello-world/"
        assert result.props.post is None
        assert result.not_found is False
        get_post.assert_not_awaited()
        get_related.assert_not_awaited()

    def test_other_referers_load_normally(self):
        result, get_post, _ = _load(referer="https://l.facebook.com/other", post=_post())

        assert result.redirect_url is None
        assert result.props.post is not None
        get_post.assert_awaited_once_with("https://cms.example.com", "hello-world")


class TestNotFound:
    def test_missing_post(self):
        result, _, get_related = _load(post=None)

        assert result.not_found is True
        assert result.props.model_dump(exclude_none=True) == {}
        get_related.assert_not_awaited()


class TestRelatedPosts:
    def test_related_attached_in_fetch_order(self):
        posts = [RelatedPost(title="B", slug="b"), RelatedPost(title="A", slug="a")]
        result, _, get_related = _load(post=_post(), related=RelatedPosts(category=_TECH, posts=posts))

        related = result.props.related
        assert related.title.name == "Tech"
        assert related.title.link == "/categories/tech"
        assert [p.slug for p in related.posts] == ["b", "a"]
        get_related.assert_awaited_once_with("https://cms.example.com", [_TECH], 42, 5)

    def test_no_related_category(self):
        result, _, _ = _load(post=_post(categories=[]), related=None)

        assert result.props.post is not None
        assert result.props.related is None

    def test_empty_related_list(self):
        result, _, _ = _load(post=_post(), related=RelatedPosts(category=_TECH, posts=[]))
        assert result.props.related is None

    def test_unnamed_category_has_no_title_name(self):
        unnamed = Category(database_id=9, name="", slug="misc")
        related = RelatedPosts(category=unnamed, posts=[RelatedPost(title="A", slug="a")])
        result, _, _ = _load(post=_post(), related=related)

        assert result.props.related.title.name is None
        assert result.props.related.title.link == "/categories/misc"


class TestFetchFailures:
    def test_errors_propagate(self):
        failing = AsyncMock(side_effect=httpx.ConnectError("down"))
        with patch("postpage.services.loader.get_post_by_slug", new=failing):
            with pytest.raises(httpx.ConnectError):
                asyncio.run(load_post_page("hello-world", None, _SETTINGS))
