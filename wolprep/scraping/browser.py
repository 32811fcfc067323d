"""Browser session on WOL: navigation, cookie banner and the tooltip surface.

Uses the Playwright sync API. There is one tab and one tooltip overlay, so
every action runs strictly one after another.
"""

import logging
from contextlib import contextmanager

from playwright.sync_api import sync_playwright, Error as PlaywrightError

from wolprep.config import (
    SELECTORS, USER_AGENT, BROWSER_LANG, BROWSER_SLOW_MO_DEBUG,
    NAVIGATION_TIMEOUT, TOOLTIP_TIMEOUT, WOL_HOME_URL,
    CITATION_LINK_SELECTOR,
)
from wolprep.errors import TooltipError
from wolprep.scraping.citations import TooltipReader

logger = logging.getLogger(__name__)


@contextmanager
def open_browser(debug: bool = False):
    """Launch Chromium and yield its first page; headed and slowed in debug."""
    with sync_playwright() as p:
        browser = p.chromium.launch(
            headless=not debug,
            args=[f"--lang={BROWSER_LANG}"],
            slow_mo=BROWSER_SLOW_MO_DEBUG if debug else None,
        )
        logger.info("browser launched (headless=%s)", not debug)
        try:
            context = browser.new_context(
                user_agent=USER_AGENT,
                locale=BROWSER_LANG.split(",")[0],
            )
            page = context.new_page()
            page.set_default_timeout(NAVIGATION_TIMEOUT)
            yield page
        finally:
            browser.close()
            logger.info("browser closed")


def go_to_this_week_article(page) -> None:
    """Home -> Today -> this week's study article."""
    page.goto(WOL_HOME_URL)
    for key in ("today_link", "this_week_w"):
        page.wait_for_selector(SELECTORS[key])
        with page.expect_navigation():
            page.click(SELECTORS[key])


def dismiss_cookies(page) -> None:
    page.wait_for_selector(SELECTORS["cookie_popup"])
    page.click(SELECTORS["cookie_accept"])
    page.wait_for_selector(SELECTORS["cookie_popup"], state="hidden")


def load_article(page, article_url=None) -> None:
    if article_url:
        logger.info("using article url: %s", article_url)
        page.goto(article_url)
    else:
        logger.info("using this week's article")
        go_to_this_week_article(page)
    logger.info("article url loaded")
    dismiss_cookies(page)
    logger.info("cookies closed")


class TooltipSurface:
    """The page's single tooltip overlay, held for one read at a time.

    Any Playwright failure while hovering, waiting or closing is raised as
    TooltipError so the caller can give up on one citation only.
    """

    def __init__(self, page, timeout: int = TOOLTIP_TIMEOUT):
        self.page = page
        self.timeout = timeout

    def _wait(self, state: str) -> None:
        try:
            self.page.wait_for_selector(
                SELECTORS["tooltip_content"], state=state, timeout=self.timeout)
        except PlaywrightError as e:
            raise TooltipError(f"Tooltip did not become {state} within {self.timeout} ms") from e

    @contextmanager
    def open(self, link_handle):
        """Hover ``link_handle`` and yield the tooltip HTML; closes on exit."""
        try:
            link_handle.hover(timeout=self.timeout)
        except PlaywrightError as e:
            raise TooltipError(f"Citation link could not be hovered: {e}") from e
        self._wait("visible")
        try:
            try:
                html = self.page.inner_html(SELECTORS["tooltip_content"])
            except PlaywrightError as e:
                raise TooltipError(f"Tooltip content could not be read: {e}") from e
            yield html
        finally:
            try:
                self.page.click(SELECTORS["tooltip_close"], timeout=self.timeout)
            except PlaywrightError as e:
                raise TooltipError(f"Tooltip close button not clickable: {e}") from e
            self._wait("hidden")


class PlaywrightTooltipReader(TooltipReader):
    """Reads tooltips for the citation links of one live container element."""

    def __init__(self, surface: TooltipSurface, container_handle,
                 link_selector: str = CITATION_LINK_SELECTOR):
        self.surface = surface
        self.container_handle = container_handle
        self.link_selector = link_selector
        self._links = None

    @property
    def links(self) -> list:
        if self._links is None:
            try:
                self._links = self.container_handle.query_selector_all(self.link_selector)
            except PlaywrightError as e:
                raise TooltipError(f"Citation links could not be listed: {e}") from e
        return self._links

    def read(self, index: int) -> str:
        if index >= len(self.links):
            raise TooltipError(f"Citation link {index + 1} is not on the live page")
        with self.surface.open(self.links[index]) as html:
            return html
