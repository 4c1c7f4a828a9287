"""
Playwright DOM

PageHandle/ElementRef adapters over playwright.async_api, plus the
browser session helper the end-to-end suite uses.

Element lists are expanded with Locator.all(); each entry is an nth()
locator, so it re-resolves against the live DOM on every call.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from playwright.async_api import Locator, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .dom import ElementRef, PageHandle, TextPattern, WAIT_STATES
from .errors import ResolutionTimeout

logger = logging.getLogger(__name__)


async def _expand(locator: Locator) -> List[ElementRef]:
    return [PlaywrightElement(item) for item in await locator.all()]


class PlaywrightElement(ElementRef):
    """ElementRef backed by a Playwright Locator"""

    def __init__(self, locator: Locator):
        self.locator = locator

    def __repr__(self) -> str:
        return f"<PlaywrightElement {self.locator}>"

    # -- queries --

    async def locate(self, selector: str) -> List[ElementRef]:
        return await _expand(self.locator.locator(selector))

    async def by_role(self, role: str, name: Optional[TextPattern] = None) -> List[ElementRef]:
        return await _expand(self.locator.get_by_role(role, name=name))

    async def by_text(self, pattern: TextPattern) -> List[ElementRef]:
        return await _expand(self.locator.get_by_text(pattern))

    # -- state --

    async def is_visible(self) -> bool:
        return await self.locator.is_visible()

    async def is_enabled(self) -> bool:
        return await self.locator.is_enabled()

    async def is_disabled(self) -> bool:
        return await self.locator.is_disabled()

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self.locator.get_attribute(name)

    async def text_content(self) -> str:
        return (await self.locator.text_content()) or ""

    async def tag_name(self) -> str:
        return await self.locator.evaluate("el => el.tagName.toLowerCase()")

    async def next_sibling(self) -> Optional[ElementRef]:
        sibling = self.locator.locator("xpath=following-sibling::*[1]")
        if await sibling.count() == 0:
            return None
        return PlaywrightElement(sibling.first)

    async def parent(self) -> Optional[ElementRef]:
        parent = self.locator.locator("xpath=..")
        if await parent.count() == 0:
            return None
        return PlaywrightElement(parent.first)

    async def is_image_loaded(self) -> bool:
        # Checks decode state regardless of visibility
        return await self.locator.evaluate(
            "el => el.tagName === 'IMG' && el.complete && el.naturalWidth > 0"
        )

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        try:
            await self.locator.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError:
            raise ResolutionTimeout(str(self.locator), state, timeout)

    # -- actions --

    async def click(self) -> None:
        await self.locator.click()

    async def fill(self, value: str) -> None:
        await self.locator.fill(value)

    async def press(self, key: str) -> None:
        await self.locator.press(key)

    async def check(self) -> None:
        await self.locator.check()


class PlaywrightPage(PageHandle):
    """PageHandle backed by a Playwright Page"""

    def __init__(self, page: Page, navigation_timeout: Optional[float] = None):
        """
        Initialize the adapter.

        Args:
            page: Playwright page object
            navigation_timeout: goto() budget in milliseconds
        """
        self.page = page
        self.navigation_timeout = navigation_timeout

    @property
    def url(self) -> str:
        return self.page.url

    async def goto(self, url: str) -> None:
        await self.page.goto(url, wait_until="load", timeout=self.navigation_timeout)

    async def title(self) -> str:
        return await self.page.title()

    async def content(self) -> str:
        return await self.page.content()

    async def wait_for_load_state(self, state: str = "load") -> None:
        await self.page.wait_for_load_state(state)

    async def press(self, key: str) -> None:
        await self.page.keyboard.press(key)

    # -- queries --

    async def locate(self, selector: str) -> List[ElementRef]:
        return await _expand(self.page.locator(selector))

    async def by_role(self, role: str, name: Optional[TextPattern] = None) -> List[ElementRef]:
        return await _expand(self.page.get_by_role(role, name=name))

    async def by_text(self, pattern: TextPattern) -> List[ElementRef]:
        return await _expand(self.page.get_by_text(pattern))

    async def wait_for(
        self,
        selector: str,
        state: str = "visible",
        timeout: Optional[float] = None
    ) -> Optional[ElementRef]:
        if state not in WAIT_STATES:
            raise ValueError(f"Unknown wait state: {state}")

        # visible/hidden are about ANY match, not just the first in DOM order
        if state == "visible":
            target = self.page.locator(f"{selector} >> visible=true").first
            wait_state = "visible"
        elif state == "hidden":
            target = self.page.locator(f"{selector} >> visible=true").first
            wait_state = "detached"
        else:
            target = self.page.locator(selector).first
            wait_state = state

        try:
            await target.wait_for(state=wait_state, timeout=timeout)
        except PlaywrightTimeoutError:
            raise ResolutionTimeout(selector, state, timeout)

        if state in ("visible", "attached"):
            return PlaywrightElement(target)
        return None

    async def wait_for_role(
        self,
        role: str,
        name: Optional[TextPattern] = None,
        state: str = "visible",
        timeout: Optional[float] = None
    ) -> ElementRef:
        target = self.page.get_by_role(role, name=name).first
        try:
            await target.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError:
            raise ResolutionTimeout(f"role={role} name={name}", state, timeout)
        return PlaywrightElement(target)


@asynccontextmanager
async def open_browser(
    headless: bool = True,
    navigation_timeout: Optional[float] = None,
    viewport: Optional[dict] = None
) -> AsyncIterator[PlaywrightPage]:
    """
    Launch Chromium and yield a PlaywrightPage, closing everything on exit.

    Args:
        headless: Run without a window
        navigation_timeout: goto() budget in milliseconds
        viewport: Optional {"width": .., "height": ..}
    """
    logger.info("Initializing Playwright browser...")
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=headless)
        context = await browser.new_context(viewport=viewport or {"width": 1920, "height": 1080})
        page = await context.new_page()
        logger.info("Browser initialized")
        try:
            yield PlaywrightPage(page, navigation_timeout=navigation_timeout)
        finally:
            await context.close()
            await browser.close()
            logger.info("Browser closed")
