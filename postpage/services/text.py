from typing import Optional

from bs4 import BeautifulSoup


def html_to_text(html: Optional[str]) -> str:
    """Return the readable text of an HTML fragment, entities decoded.

    WordPress renders titles and term names with entities (``Don&#8217;t``,
    ``Arts &amp; Culture``); these must be decoded before they are used as
    plain text, or the page escapes them a second time.
    """
    if not html:
        return ""
    return " ".join(BeautifulSoup(html, "lxml").get_text().split())
