"""Environment-driven configuration for the post page service."""

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from postpage.models.metadata import SiteMetadata
from postpage.models.render_config import AdSlot, RenderConfig

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    wordpress_api_url: str = "http://localhost:8080"
    wordpress_redirect_domain: str = ""
    wordpress_plugin_seo: bool = False

    # Visitors arriving with exactly this referer are bounced to the WordPress front end.
    redirect_referer: str = "https://l.facebook.com/"

    related_posts_count: int = 5

    mgid_script_base_url: str = "https://jsc.mgid.com/n/b/"
    mgid_in_content_id: Optional[str] = None
    mgid_in_content_src: Optional[str] = None
    mgid_end_content_id: Optional[str] = None
    mgid_end_content_src: Optional[str] = None

    site_title: str = "Blog"
    site_description: str = ""
    site_language: str = "en"
    site_homepage: str = ""
    twitter_username: Optional[str] = None

    def model_post_init(self, __context) -> None:
        super().model_post_init(__context)
        for name, slot_id, src in (
            ("in-content", self.mgid_in_content_id, self.mgid_in_content_src),
            ("end-content", self.mgid_end_content_id, self.mgid_end_content_src),
        ):
            if slot_id and not src:
                logger.warning("Ad slot %s has an id but no script source; disabling it", name)

    def _ad_slot(self, slot_id: Optional[str], src: Optional[str]) -> Optional[AdSlot]:
        if not slot_id or not src:
            return None
        return AdSlot(slot_id=slot_id, script_url=f"{self.mgid_script_base_url}{src}.js")

    def render_config(self) -> RenderConfig:
        return RenderConfig(
            seo_plugin_enabled=self.wordpress_plugin_seo,
            in_content_ad=self._ad_slot(self.mgid_in_content_id, self.mgid_in_content_src),
            end_content_ad=self._ad_slot(self.mgid_end_content_id, self.mgid_end_content_src),
        )

    def site_metadata(self) -> SiteMetadata:
        return SiteMetadata(
            title=self.site_title,
            description=self.site_description,
            language=self.site_language,
            homepage=self.site_homepage,
            twitter_username=self.twitter_username,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
