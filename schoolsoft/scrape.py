"""
Browser session (Playwright).

Owns the one Chromium process, its incognito context and the single page
every request goes through. Everything else in the package only needs:

- goto(url, wait_until)  -> load a page and block until it settled
- fill / click_and_wait  -> submit the login form
- url / content()        -> where we ended up and the rendered HTML
"""

from __future__ import annotations

import logging
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from schoolsoft.errors import NavigationError, ResourceError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Load strategies
# ---------------------------------------------------------------------------

# "load" fires once the document and its resources are in.
# "networkidle" additionally waits until no requests were made for 500 ms,
# which single-page-app routes need before their content exists.
WAIT_LOAD = "load"
WAIT_NETWORK_IDLE = "networkidle"
WAIT_STRATEGIES = (WAIT_LOAD, WAIT_NETWORK_IDLE)

DEFAULT_TIMEOUT_MS = 30_000


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class BrowserSession:
    """
    A single headless browser page.

    Not thread-safe: there is one page and calls must be made one at a time.
    """

    def __init__(
        self,
        executable_path: Optional[str] = None,
        headless: bool = True,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        self.executable_path = executable_path
        self.headless = headless
        self.timeout_ms = timeout_ms

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def is_open(self) -> bool:
        return self._page is not None

    def open(self) -> None:
        """
        Launch Chromium and open a page in a fresh (incognito) context.

        Raises ResourceError if the browser cannot be started; anything that
        was already started is shut down again.
        """
        if self.is_open:
            return

        logger.debug("Launching Chromium (headless=%s, executable=%s)", self.headless, self.executable_path)
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.headless,
                executable_path=self.executable_path,
            )
            self._context = self._browser.new_context()
            self._page = self._context.new_page()
            self._page.set_default_timeout(self.timeout_ms)
        except PlaywrightError as exc:
            try:
                self.close()
            except PlaywrightError as cleanup_exc:
                logger.warning("Cleanup after failed launch failed: %s", cleanup_exc)
            raise ResourceError(f"Could not launch browser: {exc}") from exc

    def _require_page(self) -> Page:
        if self._page is None:
            raise ResourceError("Browser session is not open")
        return self._page

    def goto(self, url: str, wait_until: str = WAIT_LOAD) -> None:
        """
        Navigate to url and block until the page reached the wait_until state.
        """
        if wait_until not in WAIT_STRATEGIES:
            raise ValueError(f"Unknown wait strategy: {wait_until!r}")

        page = self._require_page()
        logger.debug("GOTO %s (wait_until=%s)", url, wait_until)
        try:
            page.goto(url, wait_until=wait_until)
        except PlaywrightError as exc:
            raise NavigationError(url, f"Could not load {url}: {exc}") from exc

    def fill(self, selector: str, value: str) -> None:
        page = self._require_page()
        try:
            page.fill(selector, value)
        except PlaywrightError as exc:
            raise NavigationError(page.url, f"Could not fill {selector}: {exc}") from exc

    def click_and_wait(self, selector: str) -> None:
        """
        Click selector and wait for the navigation the click starts
        (form submit -> redirect).
        """
        page = self._require_page()
        try:
            with page.expect_navigation():
                page.click(selector)
        except PlaywrightError as exc:
            raise NavigationError(page.url, f"Navigation after clicking {selector} failed: {exc}") from exc

    @property
    def url(self) -> str:
        return self._require_page().url

    def content(self) -> str:
        """
        Serialized DOM of the current page (after scripts ran).
        """
        return self._require_page().content()

    def close(self) -> None:
        """
        Close the browser and stop Playwright. Safe to call more than once.
        """
        browser, playwright = self._browser, self._playwright
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

        try:
            if browser is not None:
                browser.close()
        finally:
            if playwright is not None:
                playwright.stop()
                logger.debug("Browser closed")
