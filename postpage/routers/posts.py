import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from postpage.services.loader import load_post_page
from postpage.services.renderer import render_post_page
from postpage.settings import Settings, get_settings

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.get("/posts/{slug}", response_class=HTMLResponse, name="post_detail", summary="Render a post page")
@limiter.limit("120/minute")
async def post_detail(
    request: Request,
    slug: str,
    referer: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Render the post published under *slug*.

    Answers ``307`` for referral visits that are sent back to the WordPress
    front end and ``404`` when WordPress has no such post.
    """
    result = await load_post_page(slug, referer, settings)

    if result.redirect_url is not None:
        return RedirectResponse(result.redirect_url, status_code=307)
    if result.not_found:
        raise HTTPException(status_code=404, detail="Post not found")

    html = render_post_page(result.props, settings.render_config(), settings.site_metadata())
    return HTMLResponse(html)
