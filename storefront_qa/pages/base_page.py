"""
Shared plumbing for the storefront page objects.
"""

import logging
import re
from typing import Optional

from ..config import SuiteSettings
from ..core.control_resolver import ControlResolver
from ..core.dom import PageHandle
from ..core.errors import PageAssertionError
from ..core.fact_extractor import FactExtractor

logger = logging.getLogger(__name__)


class BasePage:
    """A page object: resolver + extractor bound to one page handle"""

    def __init__(self, page: PageHandle, settings: Optional[SuiteSettings] = None):
        self.page = page
        self.settings = settings or SuiteSettings()
        self.resolver = ControlResolver(page)
        self.extractor = FactExtractor(page)

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def expect(self, condition: bool, message: str) -> None:
        """Fail the step with a readable message"""
        if not condition:
            logger.error(message)
            raise PageAssertionError(message)

    async def goto_homepage(self) -> None:
        await self.page.goto(self.base_url)

    async def expect_url(self, pattern: str, message: Optional[str] = None) -> None:
        current = self.page.url
        self.expect(
            bool(re.search(pattern, current, re.I)),
            message or f"Expected URL matching /{pattern}/i, got {current}",
        )
