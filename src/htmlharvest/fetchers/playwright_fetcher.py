"""
Playwright Fetcher Module

This module retrieves pages through a headless Chromium browser using Playwright.
Use it for pages whose content is rendered by JavaScript; the markup returned
is the DOM after the configured load state is reached.
"""

import asyncio
import logging
from typing import Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from ..config import FetchConfig
from ..exceptions import FetchError
from .base_fetcher import BaseFetcher, FetchedPage


class PlaywrightFetcher(BaseFetcher):
    """
    Browser-backed fetcher implementation using Playwright.

    Each fetch launches a browser, renders the page and closes the browser again.
    """

    def __init__(self, config: Optional[FetchConfig] = None):
        """
        Initialize the Playwright fetcher.

        Args:
            config (Optional[FetchConfig]): Configuration options for the fetcher
        """
        self.config = config or FetchConfig()
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.DEBUG if self.config.debug else logging.INFO)

    def fetch(self, url: str) -> FetchedPage:
        """
        Fetch rendered markup from a URL.

        Blocks until the page is rendered. Must not be called from inside a
        running event loop; use fetch_async there instead.

        Raises:
            FetchError: On navigation failure, timeout or a non-success status
        """
        return asyncio.run(self.fetch_async(url))

    async def fetch_async(self, url: str) -> FetchedPage:
        """
        Fetch rendered markup from a URL.

        Args:
            url (str): The URL to render

        Returns:
            FetchedPage: Final URL and the rendered markup encoded as UTF-8

        Raises:
            FetchError: On any browser failure, including a browser that
                cannot be launched
        """
        try:
            async with async_playwright() as p:
                browser = await self.launch_browser(p)
                try:
                    context = await self.create_context(browser)
                    page = await context.new_page()

                    if self.config.use_stealth:
                        await self.apply_stealth_settings(page)

                    return await self.navigate_and_get_content(page, url)
                finally:
                    await browser.close()
                    self.logger.debug("Browser closed after fetching.")
        except PlaywrightError as e:
            self.logger.error(f"Browser error fetching {url}: {str(e)}")
            raise FetchError(url, str(e)) from e

    async def launch_browser(self, playwright) -> Browser:
        """
        Launch a new browser instance with the configured settings.

        Args:
            playwright: Playwright instance

        Returns:
            Browser: Launched browser instance
        """
        return await playwright.chromium.launch(
            headless=self.config.headless,
            args=['--no-sandbox', '--disable-setuid-sandbox', '--disable-infobars'],
        )

    async def create_context(self, browser: Browser) -> BrowserContext:
        """
        Create a new browser context with the configured user agent and headers.

        Args:
            browser (Browser): Browser instance

        Returns:
            BrowserContext: Created browser context
        """
        headers = self.config.request_headers()
        user_agent = headers.pop('User-Agent')
        return await browser.new_context(
            viewport={'width': 1920, 'height': 1080},
            user_agent=user_agent,
            extra_http_headers=headers,
            java_script_enabled=True,
            ignore_https_errors=not self.config.verify_ssl,
        )

    async def apply_stealth_settings(self, page: Page):
        """
        Hide the most common automation fingerprints before any page script runs.

        Args:
            page (Page): Playwright page object
        """
        await page.add_init_script('''
            Object.defineProperty(navigator, 'webdriver', {
                get: () => undefined
            });

            Object.defineProperty(navigator, 'languages', {
                get: () => ['en-US', 'en']
            });
        ''')

    async def navigate_and_get_content(self, page: Page, url: str) -> FetchedPage:
        """
        Navigate to a URL and return its rendered markup.

        Args:
            page (Page): Playwright page object
            url (str): URL to navigate to

        Returns:
            FetchedPage: Rendered markup of the page

        Raises:
            FetchError: If navigation fails, times out or returns an error status
        """
        timeout_ms = self.config.timeout * 1000
        try:
            self.logger.info(f"Navigating to {url}")
            response = await page.goto(url, wait_until=self.config.wait_for, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            self.logger.error(f"Timed out navigating to {url}")
            raise FetchError(url, f"timed out after {self.config.timeout}s") from e
        except PlaywrightError as e:
            self.logger.error(f"Error navigating to {url}: {str(e)}")
            raise FetchError(url, str(e)) from e

        status = response.status if response is not None else None
        if response is not None and not response.ok:
            raise FetchError(url, "non-success status", status_code=status)

        if self.config.delay_after_load:
            await asyncio.sleep(self.config.delay_after_load)

        content = await page.content()
        self.logger.info(f"Successfully extracted content (length: {len(content)})")
        return FetchedPage(
            url=page.url or url,
            content=content.encode('utf-8'),
            encoding='utf-8',
            status_code=status,
        )
