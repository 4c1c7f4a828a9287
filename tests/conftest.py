"""
Pytest configuration and shared fixtures for storefront_qa tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

# Make the package importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront_qa.config import SuiteSettings
from storefront_qa.core.snapshot_dom import SnapshotPage

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://example.com/us/en/"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


# ==================== E2E Gate ====================

def pytest_collection_modifyitems(config, items):
    """Live browser journeys only run when STOREFRONT_E2E=1"""
    if os.getenv("STOREFRONT_E2E") == "1":
        return
    skip_e2e = pytest.mark.skip(reason="set STOREFRONT_E2E=1 to run live storefront journeys")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


# ==================== Settings Fixture ====================

@pytest.fixture
def settings() -> SuiteSettings:
    """Settings pointing at the offline storefront"""
    return SuiteSettings(
        base_url=BASE_URL,
        probe_timeout=1.0,
        wait_timeout=100,
        navigation_timeout=100,
    )


# ==================== Snapshot Page Fixtures ====================

@pytest.fixture
def make_page():
    """Factory for a SnapshotPage over inline markup."""
    def factory(html: str, url: str = BASE_URL, routes: Optional[Dict[str, str]] = None) -> SnapshotPage:
        return SnapshotPage(html, url=url, routes=routes)

    return factory


@pytest.fixture
def storefront_routes() -> Dict[str, str]:
    """The offline storefront: URL -> saved page"""
    return {
        BASE_URL: load_fixture("homepage.html"),
        f"{BASE_URL}products/power-tools": load_fixture("category_power_tools.html"),
        f"{BASE_URL}find-a-dealer": load_fixture("dealer_locator.html"),
        f"{BASE_URL}find-a-dealer/results": load_fixture("dealer_results.html"),
        f"{BASE_URL}service": load_fixture("service.html"),
        f"{BASE_URL}service/tool-repair": load_fixture("tool_repair.html"),
        f"{BASE_URL}search": load_fixture("search_results.html"),
    }


@pytest.fixture
def homepage_snapshot(storefront_routes) -> SnapshotPage:
    """Homepage snapshot with routes to the rest of the storefront"""
    return SnapshotPage(storefront_routes[BASE_URL], url=BASE_URL, routes=storefront_routes)


@pytest.fixture
def pdp_snapshot() -> SnapshotPage:
    """Product detail page snapshot"""
    return SnapshotPage.from_file(
        FIXTURES_DIR / "pdp.html",
        url=f"{BASE_URL}products/gxl18v-496b22-06019G5215",
    )


# ==================== HTTP Fixtures ====================

@pytest.fixture
def probe_log() -> List[httpx.Request]:
    """Requests seen by the mock transport"""
    return []


@pytest.fixture
def make_http_client(probe_log):
    """
    Factory for an httpx.AsyncClient on a MockTransport.

    `statuses` maps URL -> status code, or "error" to raise ConnectError.
    Unknown URLs answer 404.
    """
    def factory(statuses: Dict[str, Any]) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            probe_log.append(request)
            outcome = statuses.get(str(request.url), 404)
            if outcome == "error":
                raise httpx.ConnectError("Connection refused", request=request)
            return httpx.Response(outcome)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


# ==================== Mock Page Fixture ====================

@pytest.fixture
def mock_page():
    """Create a mock PageHandle."""
    page = AsyncMock()

    # Basic properties
    page.url = BASE_URL

    # Navigation
    page.goto = AsyncMock(return_value=None)
    page.wait_for_load_state = AsyncMock(return_value=None)

    # Content
    page.content = AsyncMock(return_value="<html><body><div id='test'>Test</div></body></html>")
    page.title = AsyncMock(return_value="Bosch Power Tools | Boschtools")

    # Elements
    mock_element = AsyncMock()
    mock_element.click = AsyncMock()
    mock_element.fill = AsyncMock()
    mock_element.press = AsyncMock()
    mock_element.is_visible = AsyncMock(return_value=True)
    mock_element.is_enabled = AsyncMock(return_value=True)
    mock_element.text_content = AsyncMock(return_value="Test Content")

    page.locate = AsyncMock(return_value=[mock_element])
    page.by_role = AsyncMock(return_value=[mock_element])
    page.by_text = AsyncMock(return_value=[mock_element])

    # Wait
    page.wait_for = AsyncMock(return_value=mock_element)
    page.wait_for_role = AsyncMock(return_value=mock_element)

    # Keyboard
    page.press = AsyncMock()

    page.element = mock_element
    return page
