"""
Tests for the Homepage page object against the offline storefront.
"""

from unittest.mock import AsyncMock

import pytest

from storefront_qa.core.errors import LinkCheckFailed, NotFound, PageAssertionError, ResolutionTimeout
from storefront_qa.knowledge.synonyms import CONSENT_ACCEPT_NAME
from storefront_qa.pages import Homepage

FOOTER_STATUSES = {
    "https://example.com/us/en/about-us": 200,
    "https://example.com/us/en/careers": 403,
    "https://example.com/us/en/find-a-dealer": 301,
}


class TestHomepageSmoke:
    """NAV-001: homepage loads with its essential elements."""

    @pytest.mark.asyncio
    async def test_loads_dismisses_consent_and_shows_search(self, homepage_snapshot, settings):
        home = Homepage(homepage_snapshot, settings)

        await home.navigate()
        dismissed = await home.dismiss_consent_banner()
        title = await home.verify_title()
        await home.verify_search_bar_visible()

        assert dismissed is True
        assert homepage_snapshot.actions[-1]["text"] == "Accept All"
        assert title == "Bosch Power Tools | Boschtools"

    @pytest.mark.asyncio
    async def test_no_consent_banner_is_fine(self, make_page, settings):
        home = Homepage(make_page("<title>Bosch Power Tools | Boschtools</title><p>Hi</p>"), settings)

        assert await home.dismiss_consent_banner() is False

    @pytest.mark.asyncio
    async def test_consent_button_is_waited_for(self, mock_page, settings):
        """A banner rendered after load is still found through the bounded wait."""
        mock_page.by_role = AsyncMock(return_value=[])
        home = Homepage(mock_page, settings)

        assert await home.dismiss_consent_banner() is True

        mock_page.wait_for_role.assert_awaited_once_with(
            "button", CONSENT_ACCEPT_NAME, timeout=settings.wait_timeout
        )
        mock_page.element.click.assert_awaited_once()
        mock_page.by_role.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_consent_wait_timeout_is_not_an_error(self, mock_page, settings):
        mock_page.wait_for_role = AsyncMock(
            side_effect=ResolutionTimeout("role=button", "visible", settings.wait_timeout)
        )
        home = Homepage(mock_page, settings)

        assert await home.dismiss_consent_banner() is False
        mock_page.element.click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_title_fails(self, make_page, settings):
        home = Homepage(make_page("<title>Page not found</title>"), settings)

        with pytest.raises(PageAssertionError, match="Page not found"):
            await home.verify_title()

    @pytest.mark.asyncio
    async def test_missing_search_button_fails(self, make_page, settings):
        home = Homepage(make_page("<button>Menu</button>"), settings)

        with pytest.raises(NotFound):
            await home.verify_search_bar_visible()


class TestCategoryLinks:
    """NAV-002: main category links land on the right page."""

    @pytest.mark.asyncio
    async def test_category_link(self, homepage_snapshot, settings):
        home = Homepage(homepage_snapshot, settings)
        await home.navigate()

        await home.click_and_verify_category_link("Power Tools")

        clicked = [a["text"] for a in homepage_snapshot.actions if a["action"] == "click"]
        assert "Power Tools" in clicked
        # Back on the homepage afterwards
        assert homepage_snapshot.url == settings.base_url
        assert await homepage_snapshot.title() == "Bosch Power Tools | Boschtools"

    @pytest.mark.asyncio
    async def test_title_must_name_category(self, homepage_snapshot, settings):
        """Without a routed category page the title still reads as the homepage."""
        home = Homepage(homepage_snapshot, settings)
        await home.navigate()

        with pytest.raises(PageAssertionError, match="category anchor"):
            await home.click_and_verify_category_link("Accessories")


class TestFooterLinks:
    """NAV-003: footer links resolve."""

    @pytest.mark.asyncio
    async def test_healthy_footer(self, homepage_snapshot, settings, make_http_client):
        home = Homepage(homepage_snapshot, settings)

        async with make_http_client(FOOTER_STATUSES) as client:
            report = await home.verify_footer_links(http_client=client)

        assert report.passed is True
        assert len(report.healthy) == 3
        assert len(report.skipped) == 4

    @pytest.mark.asyncio
    async def test_broken_footer_link(self, homepage_snapshot, settings, make_http_client):
        statuses = dict(FOOTER_STATUSES)
        statuses["https://example.com/us/en/careers"] = 500
        home = Homepage(homepage_snapshot, settings)

        async with make_http_client(statuses) as client:
            with pytest.raises(LinkCheckFailed) as exc_info:
                await home.verify_footer_links(http_client=client)

        assert [record.status for record in exc_info.value.failures] == [500]


class TestMobileMenu:
    """NAV-004: hamburger menu opens and closes."""

    @pytest.mark.asyncio
    async def test_toggle_opens_and_closes(self, mock_page, settings):
        home = Homepage(mock_page, settings)

        await home.verify_mobile_menu()

        assert mock_page.element.click.await_count == 2
        mock_page.wait_for.assert_any_await(Homepage.HAMBURGER_ICON, "visible", timeout=10000)
        mock_page.wait_for_role.assert_awaited_once_with("link", "Power Tools", timeout=10000)
        mock_page.wait_for.assert_any_await(Homepage.MOBILE_NAV_CONTAINER, "hidden", timeout=5000)
