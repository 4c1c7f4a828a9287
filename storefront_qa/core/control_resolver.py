"""
Control Resolver

Finds the live element behind a semantic intent ("dealer locator",
"ZIP code input") by walking ordered strategies until one matches.

Search Order:
1. Synonyms, in priority order (outermost)
2. Regions of the search scope, narrow to broad
3. Roles: link, then button, then any text node (innermost)

The first candidate that exists and is visible wins. Resolution never
clicks or types; the caller acts on the returned element.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .dom import ElementRef, PageHandle, Queryable, pattern_label
from .errors import NotFound
from .models import CandidateElement, Region, SearchScope, SynonymSet

# Configure logging
logger = logging.getLogger(__name__)


class ControlResolver:
    """
    Resolves synonym sets and selector lists to live elements.

    Features:
    - Synonym priority dominates region priority
    - Role fallback chain per region
    - Diagnostic dump of what the page offered when nothing matched
    """

    DEFAULT_ROLES = ("link", "button", "text")

    def __init__(self, page: PageHandle):
        """
        Initialize resolver.

        Args:
            page: Page handle to query
        """
        self.page = page

    # ==================== Links & Controls ====================

    async def resolve(
        self,
        synonyms: SynonymSet,
        scope: Optional[SearchScope] = None,
        roles: Optional[Sequence[str]] = None
    ) -> CandidateElement:
        """
        Resolve an intent to the first visible matching control.

        Args:
            synonyms: Ordered patterns for the intent
            scope: Ordered regions to search (whole page by default)
            roles: Role fallback chain; "text" means any text node

        Returns:
            CandidateElement

        Raises:
            NotFound: no synonym matched in any region; diagnostics hold
                every visible link text on the page
        """
        candidate = await self._search(synonyms, scope, roles)
        if candidate:
            return candidate

        diagnostics = await self.visible_link_texts()
        logger.info(f"All links on page: {diagnostics}")
        raise NotFound(f"{synonyms.intent} link or control not found.", diagnostics)

    async def resolve_optional(
        self,
        synonyms: SynonymSet,
        scope: Optional[SearchScope] = None,
        roles: Optional[Sequence[str]] = None
    ) -> Optional[CandidateElement]:
        """Like resolve(), but absence is a normal outcome"""
        return await self._search(synonyms, scope, roles)

    async def _search(
        self,
        synonyms: SynonymSet,
        scope: Optional[SearchScope],
        roles: Optional[Sequence[str]]
    ) -> Optional[CandidateElement]:
        scope = scope or SearchScope.anywhere()
        roles = tuple(roles or self.DEFAULT_ROLES)

        for pattern in synonyms:
            for region in scope:
                roots = await self._region_roots(region)
                if not roots:
                    continue
                for role in roles:
                    element = await self._first_match(roots, role, pattern)
                    if element is None:
                        continue
                    if await element.is_visible():
                        logger.info(
                            f"Resolved '{synonyms.intent}' via {role} "
                            f"{pattern_label(pattern)} in {region.name}"
                        )
                        return CandidateElement(
                            element=element,
                            region=region.name,
                            strategy=role,
                            pattern=pattern.pattern,
                        )
                    logger.debug(f"{role} {pattern_label(pattern)} in {region.name} is not visible")
        return None

    async def _region_roots(self, region: Region) -> List[Queryable]:
        if region.selector is None:
            return [self.page]
        return list(await self.page.locate(region.selector))

    async def _first_match(self, roots: List[Queryable], role: str, pattern) -> Optional[ElementRef]:
        """First element (not first visible) of a role across the region roots"""
        for root in roots:
            if role == "text":
                matches = await root.by_text(pattern)
            else:
                matches = await root.by_role(role, name=pattern)
            if matches:
                return matches[0]
        return None

    # ==================== Inputs ====================

    async def resolve_input(self, selectors: Sequence[str]) -> CandidateElement:
        """
        Resolve the first visible, enabled input.

        Every match of a selector is checked, so a disabled or hidden decoy
        earlier in the DOM does not shadow a usable field after it.

        Args:
            selectors: Selector descriptors in priority order

        Returns:
            CandidateElement

        Raises:
            NotFound: diagnostics hold placeholder/name/aria-label of every
                visible input
        """
        for selector in selectors:
            for element in await self.page.locate(selector):
                if await element.is_visible() and not await element.is_disabled():
                    logger.info(f"Resolved input via {selector}")
                    return CandidateElement(
                        element=element,
                        region="anywhere",
                        strategy="input",
                        pattern=selector,
                    )

        diagnostics = await self.visible_input_descriptors()
        logger.info(f"Visible input fields: {diagnostics}")
        raise NotFound("Input field not found.", diagnostics)

    # ==================== First Visible ====================

    async def first_visible(self, selectors: Sequence[str]) -> Optional[CandidateElement]:
        """
        First selector whose first match is visible.

        Used for containers that may legitimately be absent (suggestion
        lists, result panes), so it returns None instead of raising.
        """
        for selector in selectors:
            matches = await self.page.locate(selector)
            if matches and await matches[0].is_visible():
                return CandidateElement(
                    element=matches[0],
                    region="anywhere",
                    strategy="selector",
                    pattern=selector,
                )
        return None

    # ==================== Diagnostics ====================

    async def visible_link_texts(self) -> List[str]:
        texts = []
        for anchor in await self.page.locate("a"):
            if await anchor.is_visible():
                texts.append((await anchor.text_content()).strip())
        return texts

    async def visible_input_descriptors(self) -> List[Dict[str, Optional[str]]]:
        descriptors = []
        for field in await self.page.locate("input"):
            if await field.is_visible():
                descriptors.append({
                    "placeholder": await field.get_attribute("placeholder"),
                    "name": await field.get_attribute("name"),
                    "aria-label": await field.get_attribute("aria-label"),
                })
        return descriptors
