"""
Pytest configuration and fixtures for the Shareable render service tests.
Playwright is mocked throughout; no browser is launched.
"""
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from shareable.core.config import settings
from shareable.main import app
from shareable.services.cache_service import CacheStore
from shareable.services.render_service import RenderService, get_render_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake png content"


@pytest.fixture(autouse=True)
def allow_all_hosts(monkeypatch):
    """Start every test in permissive mode, independent of the environment."""
    monkeypatch.setattr(settings, "ALLOWED_HOSTS", "")


@pytest.fixture
def allow_hosts(monkeypatch):
    """Set the allowlist for a single test."""
    def _set(value):
        monkeypatch.setattr(settings, "ALLOWED_HOSTS", value)
    return _set


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def cache_store(tmp_path):
    """Cache store rooted in a temporary directory."""
    store = CacheStore(tmp_path / "cache")
    store.init()
    return store


@pytest.fixture
def render_service(cache_store):
    return RenderService(cache_store, navigation_timeout_ms=30000, settle_delay_ms=500)


@pytest.fixture
def mock_playwright():
    """Mock Playwright for testing."""
    with patch('shareable.services.browser.async_playwright') as mock_playwright:
        mock_browser = AsyncMock()
        mock_page = AsyncMock()

        mock_page.screenshot = AsyncMock(return_value=PNG_BYTES)
        mock_page.evaluate = AsyncMock(return_value=True)
        mock_browser.new_page = AsyncMock(return_value=mock_page)
        mock_browser.close = AsyncMock()

        launch = AsyncMock(return_value=mock_browser)
        mock_playwright.return_value.__aenter__.return_value.chromium.launch = launch

        yield {
            'playwright': mock_playwright,
            'launch': launch,
            'browser': mock_browser,
            'page': mock_page,
            'image': PNG_BYTES
        }


@pytest.fixture
def client(render_service):
    """Test client with the render service bound to the temporary cache."""
    app.dependency_overrides[get_render_service] = lambda: render_service
    yield TestClient(app)
    app.dependency_overrides.clear()
