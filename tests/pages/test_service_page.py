"""
Tests for the ServicePage page object.
"""

import pytest

from storefront_qa.core.errors import NotFound, PageAssertionError
from storefront_qa.pages import ServicePage


class TestToolRepairJourney:
    """SERVICE-001: Tool Repair page is reachable from Service/Support."""

    @pytest.mark.asyncio
    async def test_full_journey(self, homepage_snapshot, settings):
        service = ServicePage(homepage_snapshot, settings)

        await service.goto_homepage()
        menu = await service.open_service_or_support_menu()
        repair = await service.click_tool_repair_or_online_repair()
        await service.assert_repair_page_loaded()

        assert menu.region == "anywhere"
        assert repair.strategy == "link"
        assert homepage_snapshot.url == "https://example.com/us/en/service/tool-repair"

    @pytest.mark.asyncio
    async def test_footer_fallback_for_hidden_menu(self, make_page, settings):
        """A hidden mega-menu entry falls back to the footer link."""
        page = make_page(
            '<nav style="display:none"><a href="/service">Service</a></nav>'
            '<footer><a href="/support">Customer Support</a></footer>'
        )
        service = ServicePage(page, settings)

        candidate = await service.open_service_or_support_menu()

        assert candidate.region == "footer"
        assert page.url == "https://example.com/support"

    @pytest.mark.asyncio
    async def test_repair_link_as_text(self, make_page, settings):
        page = make_page('<div class="tile"><span>Online Repair Service</span></div>')
        service = ServicePage(page, settings)

        candidate = await service.click_tool_repair_or_online_repair()

        assert candidate.strategy == "text"

    @pytest.mark.asyncio
    async def test_no_repair_entry(self, make_page, settings):
        service = ServicePage(make_page('<a href="/warranty">Warranty</a>'), settings)

        with pytest.raises(NotFound, match="Tool Repair or Online Repair Service"):
            await service.click_tool_repair_or_online_repair()

    @pytest.mark.asyncio
    async def test_wrong_landing_url(self, make_page, settings):
        page = make_page("<h1>Service</h1>", url="https://example.com/us/en/service")
        service = ServicePage(page, settings)

        with pytest.raises(PageAssertionError, match="repair"):
            await service.assert_repair_page_loaded()

    @pytest.mark.asyncio
    async def test_repair_content_required(self, make_page, settings):
        page = make_page("<main><h1>Welcome</h1></main>", url="https://example.com/us/en/tool-repair")
        service = ServicePage(page, settings)

        with pytest.raises(PageAssertionError, match="Repair/Service heading"):
            await service.assert_repair_page_loaded()
