"""
Service Page

Service/Support navigation down to the tool repair page.
"""

import logging
import re

from ..core.models import ANYWHERE, CandidateElement, SearchScope
from ..knowledge.synonyms import FOOTER, SERVICE_OR_SUPPORT, TOOL_REPAIR
from .base_page import BasePage

logger = logging.getLogger(__name__)

REPAIR_OR_SERVICE = re.compile(r"repair|service", re.I)


class ServicePage(BasePage):
    """Service and repair journey"""

    # The first service link anywhere may be a hidden mega-menu entry,
    # the footer one is the fallback
    SERVICE_SCOPE = SearchScope.of(ANYWHERE, FOOTER)
    MAIN_CONTENT = "main, .main, #main, body"

    async def open_service_or_support_menu(self) -> CandidateElement:
        candidate = await self.resolver.resolve(SERVICE_OR_SUPPORT, self.SERVICE_SCOPE, roles=("link",))
        await candidate.element.click()
        return candidate

    async def click_tool_repair_or_online_repair(self) -> CandidateElement:
        candidate = await self.resolver.resolve(TOOL_REPAIR, roles=("link", "text"))
        await candidate.element.click()
        return candidate

    async def assert_repair_page_loaded(self) -> None:
        """URL mentions repair and the page shows repair/service content"""
        await self.expect_url("repair")

        for element in await self.page.by_text(REPAIR_OR_SERVICE):
            if await element.is_visible():
                return

        main = await self.page.locate(self.MAIN_CONTENT)
        main_text = (await main[0].text_content()) if main else ""
        logger.info(f"Main content text: {main_text.strip()[:500]}")
        self.expect(
            bool(REPAIR_OR_SERVICE.search(main_text)),
            "Repair/Service heading or content not found on Tool Repair page.",
        )
