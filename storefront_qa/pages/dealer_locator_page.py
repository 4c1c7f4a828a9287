"""
Dealer Locator Page

Find the dealer locator from the homepage, search by ZIP code and check
that a map or a dealer list shows up.
"""

import logging

from ..core.models import CandidateElement
from ..knowledge.synonyms import (
    DEALER_LOCATOR,
    NAVIGATION_SCOPE,
    SUBMIT_SEARCH,
    ZIP_INPUT_SELECTORS,
)
from .base_page import BasePage

logger = logging.getLogger(__name__)


class DealerLocatorPage(BasePage):
    """Dealer locator journey"""

    MAP = 'iframe, [id*="map" i], [class*="map" i]'
    DEALER_LIST = '[class*="dealer" i], [class*="result" i], ul, ol'
    RESULTS_TIMEOUT = 15000

    async def open_dealer_locator(self) -> CandidateElement:
        """Header/nav, then footer, then anywhere, for each synonym in turn"""
        candidate = await self.resolver.resolve(DEALER_LOCATOR, NAVIGATION_SCOPE)
        await candidate.element.click()
        return candidate

    async def enter_zip_and_submit(self, zip_code: str = "90210") -> CandidateElement:
        """
        Fill the first usable ZIP field and submit.

        A visible search/find/go/submit button is clicked when there is one,
        otherwise Enter is pressed in the field.
        """
        candidate = await self.resolver.resolve_input(ZIP_INPUT_SELECTORS)
        await candidate.element.fill(zip_code)

        buttons = await self.page.by_role("button", SUBMIT_SEARCH)
        if buttons and await buttons[0].is_visible():
            await buttons[0].click()
        else:
            await candidate.element.press("Enter")
        return candidate

    async def assert_dealers_or_map_visible(self) -> None:
        await self.page.wait_for(
            f"{self.MAP}, {self.DEALER_LIST}", "visible", timeout=self.RESULTS_TIMEOUT
        )
        logger.info("Dealer map or list is visible after search")
