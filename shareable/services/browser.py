"""
Headless browser session used for a single render.

Sessions are never pooled or reused: each cache miss launches chromium,
renders one page and closes it again.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

from playwright.async_api import async_playwright

from ..models import Dimensions
from ..utils.debug import print_step


class BrowserSession:
    """Thin wrapper over a launched browser and the one page it renders."""

    def __init__(self, browser):
        self.browser = browser
        self.page = None

    async def open_page(self, dimensions: Dimensions) -> None:
        self.page = await self.browser.new_page(
            device_scale_factor=dimensions.device_scale_factor
        )
        await self.page.set_viewport_size(dimensions.as_viewport())

    async def navigate(self, url: str, timeout_ms: int) -> None:
        """Load the URL and wait for the network to go idle."""
        await self.page.goto(url, wait_until="networkidle", timeout=timeout_ms)

    async def settle(self, delay_ms: int) -> None:
        await self.page.wait_for_timeout(delay_ms)

    async def evaluate(self, expression: str) -> Any:
        return await self.page.evaluate(expression)

    async def capture(self) -> bytes:
        """Screenshot of the current viewport only."""
        return await self.page.screenshot(type='png', full_page=False)


@asynccontextmanager
async def launch_session(
    headless: bool = True,
    args: Optional[Sequence[str]] = None
) -> AsyncIterator[BrowserSession]:
    """
    Launch chromium for one render and close it on every exit path.

    Args:
        headless: Run without a visible window
        args: Extra chromium command line flags

    Yields:
        A BrowserSession with no page opened yet
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless, args=list(args or []))
        print_step("Browser Launched", {"headless": headless}, "info")
        try:
            yield BrowserSession(browser)
        finally:
            await browser.close()
            print_step("Browser Closed", None, "info")
