from typing import Optional

from pydantic import BaseModel


class AdSlot(BaseModel):
    """One MGID ad placement: the element id the widget mounts on and its loader script."""

    slot_id: str
    script_url: str


class RenderConfig(BaseModel):
    """Feature toggles consumed by the render path.

    An ad slot left as ``None`` disables the corresponding insertion pass.
    """

    seo_plugin_enabled: bool = False
    in_content_ad: Optional[AdSlot] = None
    end_content_ad: Optional[AdSlot] = None
