"""
Search Page

Search entry, the Search Results Page (SRP), auto-suggest, battery-system
filtering and the empty-results state.
"""

import asyncio
import logging
import re
from typing import List, Sequence

from ..core.errors import ResolutionTimeout
from ..knowledge.synonyms import AUTO_SUGGEST_CONTAINERS, EXPAND_CONTROLS, FILTER_PANELS
from .base_page import BasePage

logger = logging.getLogger(__name__)


class SearchPage(BasePage):
    """Onsite search and the SRP"""

    SEARCH_BUTTON_NAME = "Onsite Search"
    SEARCH_INPUT_NAME = "Search"
    RESULT_CARD = '[data-track_moduletype="Product List"]'
    SRP_HEADING = "h1, h2, .search-results-title, .page-title"
    SRP_URL = r"search|\?q="
    PRODUCT_CARDS = '[data-track_moduletype="Product List"], .product-card'

    # Pause for suggestions to render after typing, in seconds
    SUGGEST_SETTLE_DELAY = 1.2
    # Pause for a ticked filter to refresh the results, in seconds
    FILTER_SETTLE_DELAY = 2.0

    async def open_search(self):
        """Reveal and return the search input"""
        button = await self.page.wait_for_role(
            "button", self.SEARCH_BUTTON_NAME, timeout=self.settings.wait_timeout
        )
        await button.click()
        return await self.page.wait_for_role(
            "combobox", self.SEARCH_INPUT_NAME, timeout=self.settings.wait_timeout
        )

    async def search_for_product(self, product_name: str, check_results: bool = True) -> None:
        """
        Search and verify the SRP.

        Args:
            product_name: Search term
            check_results: Also require a result card and a heading that
                names the term (off for searches expected to find nothing)
        """
        logger.info(f"Starting search for: {product_name}")
        search_input = await self.open_search()
        await search_input.fill(product_name)
        await search_input.press("Enter")
        await self.page.wait_for_load_state("domcontentloaded")

        current = self.page.url
        self.expect(
            bool(re.search(self.SRP_URL, current.lower())),
            f"Expected URL to navigate to Search Results Page (containing /search or ?q=), but got {current}",
        )
        if not check_results:
            return

        await self.page.wait_for(self.RESULT_CARD, "visible", timeout=self.settings.navigation_timeout)
        heading = await self.page.wait_for(self.SRP_HEADING, "visible", timeout=self.settings.wait_timeout)
        heading_text = (await heading.text_content()).strip()
        self.expect(
            product_name.lower() in heading_text.lower(),
            f"Expected SRP heading '{heading_text}' to contain '{product_name}'",
        )
        logger.info(f'SUCCESS: Search for "{product_name}" was successful and results are displayed.')

    async def check_auto_suggest(self, partial_term: str, expected: Sequence[str]) -> List[str]:
        """
        Type a partial term and look for suggestions.

        Missing suggestions (or a missing list) are warnings, not failures.

        Returns:
            The expected suggestions that were visible
        """
        logger.info(f"Testing auto-suggest for partial term: {partial_term}")
        search_input = await self.open_search()
        await search_input.fill(partial_term)
        await asyncio.sleep(self.SUGGEST_SETTLE_DELAY)

        container = await self.resolver.first_visible(AUTO_SUGGEST_CONTAINERS)
        if container is None:
            logger.warning(f"No auto-suggest list appeared for partial term: {partial_term}")
            return []

        items = await container.element.locate("li")
        found = []
        for suggestion in expected:
            for item in items:
                text = (await item.text_content()).strip()
                if suggestion.lower() in text.lower() and await item.is_visible():
                    found.append(suggestion)
                    break
            else:
                logger.warning(f"Expected suggestion '{suggestion}' not found in auto-suggest list.")
        return found

    async def filter_by_battery_system(self, tool_type: str, battery_system_label: str) -> int:
        """
        Search for a tool type, tick a battery-system filter and check the results.

        Args:
            tool_type: Generic search term, e.g. "drill"
            battery_system_label: Filter checkbox label, e.g. "18V Drill/Drivers"

        Returns:
            Number of product cards after filtering

        Raises:
            ResolutionTimeout: the filter checkbox never became visible
            PageAssertionError: no cards, or a card without the label
        """
        await self.search_for_product(tool_type)

        try:
            await self.page.wait_for(
                ", ".join(FILTER_PANELS), "visible", timeout=self.settings.navigation_timeout
            )
        except ResolutionTimeout:
            logger.warning("No filter/refine panel became visible; looking for the checkbox anyway.")

        # Expand collapsed filter groups so their checkboxes render. Last first:
        # an expanded group drops out of the match list without shifting earlier ones
        for control in reversed(await self.page.locate(EXPAND_CONTROLS)):
            if await control.is_visible() and await control.is_enabled():
                await control.click()

        checkbox = await self.page.wait_for_role(
            "checkbox",
            re.compile(re.escape(battery_system_label), re.I),
            timeout=self.settings.navigation_timeout,
        )
        await checkbox.check()
        await asyncio.sleep(self.FILTER_SETTLE_DELAY)

        cards = await self.page.locate(self.PRODUCT_CARDS)
        self.expect(len(cards) > 0, f"Expected product cards after filtering by '{battery_system_label}'")
        for card in cards:
            text = (await card.text_content()).strip()
            self.expect(
                battery_system_label.lower() in text.lower(),
                f"Expected product card '{text[:80]}' to match battery system '{battery_system_label}'",
            )
        logger.info(f"SUCCESS: Filtered by '{battery_system_label}' and verified all products match.")
        return len(cards)

    async def has_no_results(self) -> bool:
        """True when the SRP shows the empty state"""
        for message in await self.page.by_text("No Results Found"):
            if await message.is_visible():
                return True

        if not await self.page.locate('[data-testid="product-card"]'):
            return True

        for tab in await self.page.locate("a"):
            text = (await tab.text_content()).strip()
            if "Products" in text and await tab.is_visible():
                return bool(re.search(r"Products\s*\(0\)", text))
        return False
