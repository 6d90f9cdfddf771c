import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from postpage.models.metadata import SiteMetadata
from postpage.routers.posts import limiter, router as posts_router
from postpage.services.renderer import render_status_page
from postpage.settings import get_settings

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Postpage – Headless WordPress post pages",
    description="Renders WordPress posts as HTML pages with SEO metadata and MGID ad slots.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def _site_metadata(request: Request) -> SiteMetadata:
    # Resolve settings the way route dependencies do, so overrides apply here too
    settings_provider = request.app.dependency_overrides.get(get_settings, get_settings)
    return settings_provider().site_metadata()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> HTMLResponse:
    site = _site_metadata(request)
    if exc.status_code == 404:
        return HTMLResponse(render_status_page("not_found.html", site), status_code=404)
    return HTMLResponse(
        render_status_page("error.html", site, status_code=exc.status_code),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    logger.exception("Unhandled exception for %s", request.url)
    site = _site_metadata(request)
    return HTMLResponse(render_status_page("error.html", site, status_code=500), status_code=500)


app.include_router(posts_router)


@app.get("/health", summary="Health check")
async def healthcheck() -> dict:
    return {"status": "ok"}
