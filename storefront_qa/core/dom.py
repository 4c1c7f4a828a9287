"""
DOM Handle Interface

The page/element surface that the resolver, the fact extractor and the
link checker run against. Nothing in the core talks to a browser library
directly; it talks to these two interfaces.

Adapters:
- PlaywrightPage / PlaywrightElement  (live browser, playwright_dom.py)
- SnapshotPage / SnapshotElement      (static HTML, snapshot_dom.py)

Every query re-reads the DOM. Element references are not meant to be
held across navigation or other page mutations; re-resolve instead.
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Pattern, Union

# Literal strings match as case-insensitive substrings, patterns via search()
TextPattern = Union[str, Pattern[str]]

WAIT_STATES = ("visible", "hidden", "attached", "detached")


def compile_pattern(pattern: TextPattern) -> Pattern[str]:
    """Turn a literal into a case-insensitive pattern, pass patterns through"""
    if isinstance(pattern, str):
        return re.compile(re.escape(pattern), re.I)
    return pattern


def normalize_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace and strip"""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def pattern_label(pattern: TextPattern) -> str:
    """Human readable form of a pattern for logs"""
    if isinstance(pattern, str):
        return pattern
    return f"/{pattern.pattern}/"


class Queryable(ABC):
    """Something elements can be looked up under (a page or an element)"""

    @abstractmethod
    async def locate(self, selector: str) -> List["ElementRef"]:
        """All elements matching a CSS selector, in document order"""

    @abstractmethod
    async def by_role(self, role: str, name: Optional[TextPattern] = None) -> List["ElementRef"]:
        """All elements with an ARIA role whose accessible name matches"""

    @abstractmethod
    async def by_text(self, pattern: TextPattern) -> List["ElementRef"]:
        """Innermost elements whose text matches"""


class ElementRef(Queryable):
    """A live reference to one DOM node"""

    @abstractmethod
    async def is_visible(self) -> bool:
        ...

    @abstractmethod
    async def is_enabled(self) -> bool:
        ...

    async def is_disabled(self) -> bool:
        return not await self.is_enabled()

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        ...

    @abstractmethod
    async def text_content(self) -> str:
        """Raw text content ('' when the node has none)"""

    @abstractmethod
    async def tag_name(self) -> str:
        """Lower-case tag name"""

    @abstractmethod
    async def next_sibling(self) -> Optional["ElementRef"]:
        """Next element sibling, skipping text nodes"""

    @abstractmethod
    async def parent(self) -> Optional["ElementRef"]:
        ...

    @abstractmethod
    async def is_image_loaded(self) -> bool:
        """True when the node is an image that decoded with a non-zero width"""

    @abstractmethod
    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        """Wait for this element to reach a state, raising ResolutionTimeout"""

    # Actions. Only these mutate the page.

    @abstractmethod
    async def click(self) -> None:
        ...

    @abstractmethod
    async def fill(self, value: str) -> None:
        ...

    @abstractmethod
    async def press(self, key: str) -> None:
        ...

    @abstractmethod
    async def check(self) -> None:
        ...


class PageHandle(Queryable):
    """A browser tab (or a stand-in for one)"""

    @property
    @abstractmethod
    def url(self) -> str:
        ...

    @abstractmethod
    async def goto(self, url: str) -> None:
        ...

    @abstractmethod
    async def title(self) -> str:
        ...

    @abstractmethod
    async def content(self) -> str:
        """Full rendered markup"""

    @abstractmethod
    async def wait_for(
        self,
        selector: str,
        state: str = "visible",
        timeout: Optional[float] = None
    ) -> Optional[ElementRef]:
        """
        Wait until any element matching the selector reaches a state.

        Args:
            selector: CSS selector
            state: visible, hidden, attached or detached
            timeout: Budget in milliseconds

        Returns:
            The first element in that state for visible/attached, else None

        Raises:
            ResolutionTimeout: the state was not reached in time
        """

    @abstractmethod
    async def wait_for_role(
        self,
        role: str,
        name: Optional[TextPattern] = None,
        state: str = "visible",
        timeout: Optional[float] = None
    ) -> ElementRef:
        """Wait for the first element with a role/name to reach a state"""

    @abstractmethod
    async def wait_for_load_state(self, state: str = "load") -> None:
        ...

    @abstractmethod
    async def press(self, key: str) -> None:
        """Press a key on whatever has focus"""
