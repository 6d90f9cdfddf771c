"""MGID ad insertion passes over the rendered post page.

Both passes remove the markup they inserted on a previous run before
inserting again, so running them repeatedly over the same page converges
to one set of ads.
"""

import logging
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from postpage.models.render_config import AdSlot, RenderConfig

logger = logging.getLogger(__name__)

CONTENT_CONTAINER_ID = "content-wp"
END_PLACEHOLDER_ID = "adsEndWrapper"
IN_CONTENT_WRAPPER_CLASS = "adsWrapper"
END_CONTENT_WRAPPER_CLASS = "adsEndWrapper"

# An ad goes in front of every Nth content block
IN_CONTENT_AD_INTERVAL = 5


def ad_insertion_indices(blocks: Sequence[bool], every: int = IN_CONTENT_AD_INTERVAL) -> List[int]:
    """Return the child indices that receive an ad in front of them.

    *blocks* describes the container's direct children in order: ``True`` for
    an element (a content block), ``False`` for text or comment nodes, which
    keep their index but are not counted. Blocks ``every``, ``2 * every``, …
    (1-indexed) are selected.
    """
    indices: List[int] = []
    seen = 0
    for index, is_block in enumerate(blocks):
        if not is_block:
            continue
        seen += 1
        if seen % every == 0:
            indices.append(index)
    return indices


def _build_ad_wrapper(soup: BeautifulSoup, slot: AdSlot, wrapper_class: str) -> Tag:
    wrapper = soup.new_tag("div", attrs={"class": wrapper_class})
    wrapper.append(soup.new_tag("div", attrs={"id": slot.slot_id}))
    wrapper.append(soup.new_tag("script", attrs={"src": slot.script_url, "async": ""}))
    return wrapper


def _remove_wrappers(soup: BeautifulSoup, wrapper_class: str) -> None:
    for wrapper in soup.select(f".{wrapper_class}"):
        wrapper.decompose()


def insert_in_content_ads(soup: BeautifulSoup, slot: Optional[AdSlot]) -> int:
    """Place an ad wrapper before every fifth block of the post body.

    Returns the number of wrappers inserted.
    """
    if slot is None:
        return 0

    container = soup.find(id=CONTENT_CONTAINER_ID)
    if container is None:
        logger.warning("No #%s element on the page; skipping in-content ads", CONTENT_CONTAINER_ID)
        return 0

    _remove_wrappers(soup, IN_CONTENT_WRAPPER_CLASS)

    children = list(container.children)
    indices = ad_insertion_indices([isinstance(child, Tag) for child in children])
    # Anchor on the child nodes themselves so earlier insertions cannot shift later ones
    for index in indices:
        children[index].insert_before(_build_ad_wrapper(soup, slot, IN_CONTENT_WRAPPER_CLASS))

    logger.debug("Inserted %d in-content ads", len(indices))
    return len(indices)


def insert_end_content_ads(soup: BeautifulSoup, slot: Optional[AdSlot]) -> int:
    """Append one ad wrapper into the end-of-content placeholder."""
    if slot is None:
        return 0

    placeholder = soup.find(id=END_PLACEHOLDER_ID)
    if placeholder is None:
        logger.warning("No #%s element on the page; skipping end-of-content ad", END_PLACEHOLDER_ID)
        return 0

    _remove_wrappers(soup, END_CONTENT_WRAPPER_CLASS)
    placeholder.append(_build_ad_wrapper(soup, slot, END_CONTENT_WRAPPER_CLASS))
    return 1


def apply_ad_passes(html: str, config: RenderConfig) -> str:
    """Run both ad passes over *html* and return the patched document."""
    if config.in_content_ad is None and config.end_content_ad is None:
        return html

    soup = BeautifulSoup(html, "lxml")
    insert_in_content_ads(soup, config.in_content_ad)
    insert_end_content_ads(soup, config.end_content_ad)
    return str(soup)
