"""
Product Page

Product Detail Page (PDP) checks: title, image, model number,
specifications and the Where to Buy entry point.
"""

import logging
from typing import Optional

from ..core.dom import ElementRef
from ..core.errors import NotFound
from ..core.models import CandidateElement, Fact
from ..knowledge.synonyms import (
    MODEL_NUMBER_PATTERNS,
    SPECIFICATION_SECTION,
    WHERE_TO_BUY,
)
from .base_page import BasePage

logger = logging.getLogger(__name__)


class ProductPage(BasePage):
    """A single product's detail page"""

    TITLE = 'h1, .product-title, [data-testid="product-title"]'
    IMAGE = 'img[alt][src*="product"], img.product-image, [data-testid="product-image"]'
    MODEL_NUMBER_TEST_ID = '[data-testid="model-number"]'

    async def goto(self, product_url: str) -> None:
        await self.page.goto(product_url)

    async def assert_product_title_visible(self) -> ElementRef:
        return await self.page.wait_for(self.TITLE, "visible", timeout=self.settings.wait_timeout)

    async def assert_product_image_loaded(self) -> ElementRef:
        image = await self.page.wait_for(self.IMAGE, "attached", timeout=self.settings.wait_timeout)
        self.expect(await image.is_image_loaded(), "Product image is attached but did not load")
        return image

    async def assert_model_number_visible(self) -> ElementRef:
        """Model number by test id, then by Model/SKU/Part No./Product Number text"""
        candidate = await self.resolver.first_visible([self.MODEL_NUMBER_TEST_ID])
        if candidate:
            return candidate.element

        for pattern in MODEL_NUMBER_PATTERNS:
            for element in await self.page.by_text(pattern):
                if await element.is_visible():
                    return element

        raise NotFound("Model number not found or not visible on the PDP.")

    async def open_specification_section_if_needed(self) -> bool:
        """Click a specifications tab/button/link if there is one"""
        candidate = await self.resolver.resolve_optional(
            SPECIFICATION_SECTION, roles=("tab", "button", "text")
        )
        if candidate is None:
            # Nothing to click: the section is assumed to be already visible
            return False
        await candidate.element.click()
        return True

    async def get_specification_value(self, key: str) -> Optional[str]:
        return await self.extractor.get_value(key)

    async def get_specification(self, key: str) -> Fact:
        return await self.extractor.extract(key)

    async def click_where_to_buy_or_dealer_locator(self) -> CandidateElement:
        candidate = await self.resolver.resolve(WHERE_TO_BUY, roles=("button", "link", "text"))
        await candidate.element.click()
        return candidate
