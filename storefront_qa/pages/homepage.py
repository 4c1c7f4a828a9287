"""
Homepage

Smoke checks and navigation: consent banner, title, search entry point,
category links, footer link health and the mobile menu.
"""

import logging
import re
from typing import Optional

import httpx

from ..core.errors import ResolutionTimeout
from ..core.link_checker import LinkHealthChecker
from ..core.models import LinkReport
from ..knowledge.synonyms import CONSENT_ACCEPT_NAME
from .base_page import BasePage

logger = logging.getLogger(__name__)


class Homepage(BasePage):
    """Storefront homepage"""

    EXPECTED_TITLE = re.compile(r"Bosch Power Tools \| Boschtools", re.I)
    SEARCH_BUTTON_NAME = "Onsite Search"

    # Main navigation: link label -> URL slug
    CATEGORY_LINKS = {
        "Power Tools": "power-tools",
        "Accessories": "accessories",
        "Measuring Tools": "measuring-and-layout-tools",
        "Hand Tools": "hand-tools",
        "Service": "service",
        "Trade Solutions": "trade-solutions",
        "New Products": "new-products",
    }

    HAMBURGER_ICON = ".m-mainNavigation__toggle"
    MOBILE_NAV_CONTAINER = "nav.mobile-navigation, div#mobile-menu, .m-mainNavigation__itemsWrapper"

    async def navigate(self) -> None:
        await self.page.goto(self.base_url)
        self.expect(
            self.page.url == self.base_url,
            f"Expected homepage URL {self.base_url}, got {self.page.url}",
        )

    async def dismiss_consent_banner(self) -> bool:
        """Accept the consent banner if one is showing. Returns whether it was."""
        await self.page.wait_for_load_state("load")
        # Banners can render after the load event
        try:
            button = await self.page.wait_for_role(
                "button", CONSENT_ACCEPT_NAME, timeout=self.settings.wait_timeout
            )
        except ResolutionTimeout:
            logger.info("No visible consent banner found.")
            return False
        await button.click()
        logger.info("Consent banner dismissed.")
        return True

    async def verify_title(self) -> str:
        title = await self.page.title()
        logger.info(f"Page Title: {title}")
        self.expect(
            bool(self.EXPECTED_TITLE.search(title)),
            f"Expected title matching /{self.EXPECTED_TITLE.pattern}/i, got '{title}'",
        )
        return title

    async def verify_search_bar_visible(self) -> None:
        await self.page.wait_for_role(
            "button", self.SEARCH_BUTTON_NAME, timeout=self.settings.wait_timeout
        )
        logger.info("Main search bar element is visible.")

    async def click_and_verify_category_link(self, label: str, slug: Optional[str] = None) -> None:
        """
        Click a main category link and check where it landed.

        The URL must contain the first word of the slug and the title must
        contain every word of the link label. Returns to the homepage after.

        Args:
            label: Visible link label, e.g. "Power Tools"
            slug: URL slug, e.g. "power-tools" (looked up from CATEGORY_LINKS)
        """
        slug = slug or self.CATEGORY_LINKS.get(label, label.lower().replace(" ", "-"))
        link = await self.page.wait_for_role(
            "link", label, timeout=self.settings.navigation_timeout
        )
        category_label = (await link.text_content()).strip() or slug

        await link.click()
        await self.page.wait_for_load_state("load")

        url_anchor = slug.split("-")[0].lower()
        current_url = self.page.url.lower()
        self.expect(
            url_anchor in current_url,
            f'Expected URL "{current_url}" to contain category slug anchor "{url_anchor}"',
        )
        logger.info(f'URL check passed: URL contains "{url_anchor}".')

        title = await self.page.title()
        title_words = category_label.lower().split()
        self.expect(
            all(word in title.lower() for word in title_words),
            f'Expected page title "{title}" to contain all words from category anchor "{category_label}"',
        )
        logger.info(f'Successfully navigated to the "{category_label}" page.')

        await self.page.goto(self.base_url)
        await self.page.wait_for_load_state("load")
        await self.verify_search_bar_visible()
        await self.dismiss_consent_banner()

    async def verify_footer_links(
        self,
        footer_selector: str = "footer",
        http_client: Optional[httpx.AsyncClient] = None
    ) -> LinkReport:
        """Every footer link must answer with a healthy status"""
        checker = LinkHealthChecker(
            self.page,
            client=http_client,
            timeout=self.settings.probe_timeout,
            healthy_statuses=self.settings.healthy_statuses,
            text_denylist=self.settings.link_text_denylist,
            wait_timeout=self.settings.navigation_timeout,
        )
        return await checker.verify_links(footer_selector, self.base_url)

    async def verify_mobile_menu(self) -> None:
        """Hamburger reveals the navigation, a second tap hides it"""
        toggle = await self.page.wait_for(self.HAMBURGER_ICON, "visible", timeout=10000)
        logger.info("Hamburger menu icon is visible in mobile viewport.")
        await toggle.click()

        await self.page.wait_for_role("link", "Power Tools", timeout=10000)
        await self.page.wait_for(self.MOBILE_NAV_CONTAINER, "visible", timeout=5000)
        logger.info("Mobile navigation links are successfully revealed.")

        await toggle.click()
        await self.page.wait_for(self.MOBILE_NAV_CONTAINER, "hidden", timeout=5000)
        logger.info("Mobile navigation menu closed.")
