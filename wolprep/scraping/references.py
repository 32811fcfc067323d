"""Reference-lookup endpoint: the JSON behind scripture tooltips.

Fetching the endpoint directly bypasses the tooltip UI, which is how
citations nested inside a tooltip get resolved.
"""

import re
import logging

import requests
from bs4 import BeautifulSoup

from wolprep.config import WOL_BASE_URL, REFERENCE_HEADERS, REFERENCE_TIMEOUT, USER_AGENT
from wolprep.errors import ReferenceLookupError
from wolprep.scraping.text import collapse_ws

logger = logging.getLogger(__name__)


def reference_url(href: str) -> str:
    """Link hrefs start with a language folder ("/es/wol/bc/...") the API drops."""
    path = re.sub(r"^/[^/]+/", "", href)
    return f"{WOL_BASE_URL}/{path}"


def html_to_text(html: str) -> str:
    """Plain text of an HTML fragment with every anchor removed."""
    fragment = BeautifulSoup(html, "html.parser")
    for a in fragment.find_all("a"):
        a.decompose()
    return collapse_ws(fragment.get_text())


class ReferenceClient:
    """Fetches citation text for a link href. One request at a time."""

    def __init__(self, session=None, timeout: int = REFERENCE_TIMEOUT):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT, **REFERENCE_HEADERS})
        self.timeout = timeout

    def fetch_html(self, href: str) -> str:
        url = reference_url(href)
        logger.debug("fetching reference %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            items = resp.json().get("items") or []
        except (requests.RequestException, ValueError) as e:
            raise ReferenceLookupError(f"Reference lookup failed for {href}: {e}") from e
        if not items:
            raise ReferenceLookupError(f"Reference lookup for {href} returned no items")
        return items[0].get("content", "")

    def fetch_text(self, href: str) -> str:
        return html_to_text(self.fetch_html(href))

    __call__ = fetch_text
