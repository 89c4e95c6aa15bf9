"""
Render pipeline for social preview images.

A request passes the allowlist, then the cache; on a miss a fresh browser
session loads the page with the ``#render-shareable`` fragment, waits for the
page script to swap in the shareable content, screenshots the viewport and
stores the PNG in the cache.
"""
from typing import Optional, Sequence

from fastapi.concurrency import run_in_threadpool
from playwright.async_api import Error as PlaywrightError

from ..core.config import settings
from ..core.errors import ContentNotReady, ForbiddenOrigin, SessionFailure
from ..models import RenderRequest, RenderResult
from ..utils.debug import print_step
from ..utils.security import allowed_origins, is_url_allowed, normalize_url
from .browser import launch_session
from .cache_service import CacheMiss, CacheStore, get_cache_store

SHAREABLE_FRAGMENT = "render-shareable"
RENDERED_MARKER = "data-shareable-rendered"

# True once the page script has replaced the body with non-empty content
READINESS_CHECK_SCRIPT = f"""() => {{
    const body = document.body;
    if (!body || !body.hasAttribute('{RENDERED_MARKER}')) {{
        return false;
    }}
    return body.innerText.trim().length > 0 || body.childElementCount > 0;
}}"""


def shareable_url(url: str) -> str:
    """Replace the URL's fragment (or append one) with the render trigger."""
    base, _, _ = url.partition("#")
    return f"{base}#{SHAREABLE_FRAGMENT}"


class RenderService:
    """Drives one render request from allowlist check to cached PNG."""

    def __init__(
        self,
        cache_store: CacheStore,
        navigation_timeout_ms: int = 30000,
        settle_delay_ms: int = 500,
        headless: bool = True,
        browser_args: Optional[Sequence[str]] = None
    ):
        self.cache_store = cache_store
        self.navigation_timeout_ms = navigation_timeout_ms
        self.settle_delay_ms = settle_delay_ms
        self.headless = headless
        self.browser_args = list(browser_args or [])

    async def render(self, request: RenderRequest) -> RenderResult:
        """
        Produce the preview image for a request.

        Args:
            request: Validated render request

        Returns:
            RenderResult with the PNG bytes and whether they came from cache

        Raises:
            ForbiddenOrigin: URL origin is not allowlisted (checked before the cache)
            ContentNotReady: Page never rendered shareable content
            SessionFailure: Browser launch, navigation, capture or cache write failed
        """
        print_step("Render Request", {
            "url": request.url,
            "format": request.format.value,
            "rebuild": request.rebuild,
            "skip_readiness_check": request.skip_readiness_check
        }, "input")

        if not is_url_allowed(request.url):
            print_step("Host Not Allowed", {"url": request.url}, "warning")
            raise ForbiddenOrigin(request.url, allowed_origins())
        # Navigate to exactly the URL whose origin was checked
        page_url = normalize_url(request.url)

        key = request.cache_key
        if not request.rebuild:
            cached = await run_in_threadpool(self._lookup, key)
            if cached is not None:
                print_step("Cache Hit", {"url": request.url, "cache_key": key}, "output")
                return RenderResult(image=cached, cache_hit=True, cache_key=key)

        print_step("Cache Miss", {"url": request.url, "cache_key": key, "rebuild": request.rebuild}, "info")
        image = await self._capture(request, page_url)
        await run_in_threadpool(self.cache_store.write, key, image)
        return RenderResult(image=image, cache_hit=False, cache_key=key)

    def _lookup(self, key: str) -> Optional[bytes]:
        try:
            return self.cache_store.read(key)
        except CacheMiss:
            return None

    async def _capture(self, request: RenderRequest, page_url: str) -> bytes:
        target_url = shareable_url(page_url)
        dimensions = request.dimensions

        try:
            async with launch_session(headless=self.headless, args=self.browser_args) as session:
                await session.open_page(dimensions)

                print_step("Navigating", {"target_url": target_url, "timeout_ms": self.navigation_timeout_ms}, "info")
                await session.navigate(target_url, self.navigation_timeout_ms)

                # Give the page script time to swap the body
                await session.settle(self.settle_delay_ms)

                if not request.skip_readiness_check:
                    ready = await session.evaluate(READINESS_CHECK_SCRIPT)
                    if not ready:
                        print_step("Shareable Content Missing", {"url": request.url}, "warning")
                        raise ContentNotReady(
                            "No <template data-shareable> content was rendered on the page"
                        )

                image = await session.capture()
        except PlaywrightError as e:
            print_step("Render Error", {"url": request.url, "error": str(e)}, "error")
            raise SessionFailure(str(e)) from e

        print_step("Screenshot Captured", {
            "url": request.url,
            "width": dimensions.width,
            "height": dimensions.height,
            "image_size_bytes": len(image)
        }, "output")
        return image


def get_render_service() -> RenderService:
    """Render service wired to the process-wide cache and settings."""
    return RenderService(
        cache_store=get_cache_store(),
        navigation_timeout_ms=settings.NAVIGATION_TIMEOUT_MS,
        settle_delay_ms=settings.SETTLE_DELAY_MS,
        headless=settings.BROWSER_HEADLESS,
        browser_args=settings.BROWSER_ARGS
    )
