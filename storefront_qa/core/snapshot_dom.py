"""
Snapshot DOM

A PageHandle over static HTML parsed with BeautifulSoup.

Used to run the resolver and the extractor against saved pages (no
browser needed) and as the in-memory DOM the unit tests use. It mirrors
the Playwright semantics the core relies on:
- role queries use implicit ARIA roles and accessible names
- text queries return the innermost matching elements
- visibility follows hidden / display:none / visibility:hidden
- links navigate between registered routes when clicked
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup, NavigableString, Tag

from .dom import (
    ElementRef,
    PageHandle,
    TextPattern,
    WAIT_STATES,
    compile_pattern,
    normalize_whitespace,
)
from .errors import ResolutionTimeout

logger = logging.getLogger(__name__)


# Never rendered, never matched by text queries
NON_RENDERED = {"head", "script", "style", "template", "noscript", "meta", "link", "title"}

ROLE_SELECTORS: Dict[str, str] = {
    "link": "a[href], area[href], [role=link]",
    "button": (
        "button, input[type=button], input[type=submit], input[type=reset], "
        "input[type=image], summary, [role=button]"
    ),
    "tab": "[role=tab]",
    "checkbox": "input[type=checkbox], [role=checkbox]",
    "radio": "input[type=radio], [role=radio]",
    "combobox": "select, [role=combobox]",
    "textbox": (
        "textarea, input:not([type]), input[type=text], input[type=email], "
        "input[type=tel], input[type=url], [role=textbox]"
    ),
    "searchbox": "input[type=search], [role=searchbox]",
    "heading": "h1, h2, h3, h4, h5, h6, [role=heading]",
    "listbox": "[role=listbox]",
    "option": "option, [role=option]",
    "img": "img[alt], [role=img]",
    "navigation": "nav, [role=navigation]",
}

CONTROL_TAGS = {"button", "input", "select", "textarea", "option", "fieldset"}


# ==================== Tree Helpers ====================

def _is_rendered(tag: Tag) -> bool:
    node = tag
    while isinstance(node, Tag) and node.name != "[document]":
        if node.name in NON_RENDERED:
            return False
        node = node.parent
    return True


def _rendered_text(tag: Tag) -> str:
    """Text of a subtree, leaving out script/style/head content and comments"""
    parts = []
    for piece in tag.find_all(string=True):
        if type(piece) is not NavigableString:
            continue
        if piece.parent is not None and _is_rendered(piece.parent):
            parts.append(str(piece))
    return normalize_whitespace("".join(parts))


def _is_visible(tag: Tag) -> bool:
    node = tag
    while isinstance(node, Tag) and node.name != "[document]":
        if node.name in NON_RENDERED:
            return False
        if node.has_attr("hidden"):
            return False
        style = (node.get("style") or "").replace(" ", "").lower()
        if "display:none" in style or "visibility:hidden" in style:
            return False
        if node.name == "input" and (node.get("type") or "").lower() == "hidden":
            return False
        node = node.parent
    return True


def _is_enabled(tag: Tag) -> bool:
    if tag.name in CONTROL_TAGS and tag.has_attr("disabled"):
        return False
    if (tag.get("aria-disabled") or "").lower() == "true":
        return False
    # A disabled fieldset disables every control inside it
    if tag.name in CONTROL_TAGS:
        for ancestor in tag.parents:
            if isinstance(ancestor, Tag) and ancestor.name == "fieldset" and ancestor.has_attr("disabled"):
                return False
    return True


def _label_text(tag: Tag) -> str:
    """Text of a <label for=id> or of a wrapping <label>"""
    field_id = tag.get("id")
    if field_id:
        root = tag
        while root.parent is not None:
            root = root.parent
        label = root.find("label", attrs={"for": field_id})
        if label is not None:
            return normalize_whitespace(label.get_text())
    wrapper = tag.find_parent("label")
    if wrapper is not None:
        return normalize_whitespace(wrapper.get_text())
    return ""


def _accessible_name(tag: Tag) -> str:
    label = tag.get("aria-label")
    if label:
        return normalize_whitespace(label)

    if tag.name == "input":
        input_type = (tag.get("type") or "text").lower()
        if input_type in ("button", "submit", "reset"):
            return normalize_whitespace(tag.get("value") or "")
        if input_type == "image":
            return normalize_whitespace(tag.get("alt") or "")
        label = _label_text(tag)
        if label:
            return label
        return normalize_whitespace(tag.get("placeholder") or tag.get("title") or "")

    text = normalize_whitespace(tag.get_text())
    if text:
        return text

    alts = [img.get("alt", "") for img in tag.find_all("img")]
    alt_text = normalize_whitespace(" ".join(a for a in alts if a))
    if alt_text:
        return alt_text
    return normalize_whitespace(tag.get("title") or "")


def _role_of(tag: Tag, role: str) -> bool:
    explicit = tag.get("role")
    return explicit is None or explicit == role


# ==================== Elements ====================

class SnapshotElement(ElementRef):
    """One node of a snapshot document"""

    def __init__(self, tag: Tag, page: "SnapshotPage"):
        self.tag = tag
        self.page = page

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, SnapshotElement) and other.tag is self.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        return f"<SnapshotElement {self.tag.name} '{normalize_whitespace(self.tag.get_text())[:40]}'>"

    # -- queries --

    async def locate(self, selector: str) -> List[ElementRef]:
        return self.page._wrap(self.tag.select(selector))

    async def by_role(self, role: str, name: Optional[TextPattern] = None) -> List[ElementRef]:
        return self.page._wrap(self.page._role_matches(self.tag, role, name))

    async def by_text(self, pattern: TextPattern) -> List[ElementRef]:
        return self.page._wrap(self.page._text_matches(self.tag, pattern))

    # -- state --

    async def is_visible(self) -> bool:
        return _is_visible(self.tag)

    async def is_enabled(self) -> bool:
        return _is_enabled(self.tag)

    async def get_attribute(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    async def text_content(self) -> str:
        return self.tag.get_text()

    async def tag_name(self) -> str:
        return self.tag.name

    async def next_sibling(self) -> Optional[ElementRef]:
        sibling = self.tag.find_next_sibling()
        return SnapshotElement(sibling, self.page) if sibling is not None else None

    async def parent(self) -> Optional[ElementRef]:
        parent = self.tag.parent
        if not isinstance(parent, Tag) or parent.name == "[document]":
            return None
        return SnapshotElement(parent, self.page)

    async def is_image_loaded(self) -> bool:
        return self.tag.name == "img" and bool(self.tag.get("src"))

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        root = self.tag
        while root.parent is not None:
            root = root.parent
        # Nodes of a document that was navigated away from count as detached
        attached = root is self.page.soup
        visible = attached and _is_visible(self.tag)
        reached = {
            "visible": visible,
            "hidden": not visible,
            "attached": attached,
            "detached": not attached,
        }[state]
        if not reached:
            raise ResolutionTimeout(repr(self), state, timeout)

    # -- actions --

    async def click(self) -> None:
        self.page._record("click", self)
        href = self.tag.get("href")
        if self.tag.name in ("a", "area") and href and not href.startswith("#"):
            await self.page.goto(urljoin(self.page.url, href))
        elif self._submits_form() and _is_enabled(self.tag):
            await self.page._submit_enclosing_form(self.tag)

    def _submits_form(self) -> bool:
        button_type = (self.tag.get("type") or "").lower()
        if self.tag.name == "button":
            return button_type in ("", "submit")
        return self.tag.name == "input" and button_type in ("submit", "image")

    async def fill(self, value: str) -> None:
        self.page._record("fill", self, value)
        self.tag["value"] = value

    async def press(self, key: str) -> None:
        self.page._record("press", self, key)
        if key == "Enter":
            await self.page._submit_enclosing_form(self.tag)

    async def check(self) -> None:
        self.page._record("check", self)
        self.tag["checked"] = ""


# ==================== Page ====================

class SnapshotPage(PageHandle):
    """
    A page backed by static HTML.

    Features:
    - Optional route table so clicked links and submitted forms load the
      next document, enough to walk a short journey offline
    - Every action is recorded in `actions` for assertions
    """

    def __init__(
        self,
        html: str,
        url: str = "about:blank",
        routes: Optional[Dict[str, str]] = None
    ):
        """
        Initialize a snapshot page.

        Args:
            html: Document markup
            url: URL the document was captured from
            routes: Optional url -> markup table used by goto()
        """
        self.routes: Dict[str, str] = dict(routes or {})
        self.actions: List[Dict[str, Any]] = []
        self._url = url
        self.soup = BeautifulSoup(html, "html.parser")

    @classmethod
    def from_file(cls, path: Union[str, Path], url: str = "about:blank", **kwargs) -> "SnapshotPage":
        """Load a saved page from disk"""
        return cls(Path(path).read_text(encoding="utf-8"), url=url, **kwargs)

    # -- navigation --

    @property
    def url(self) -> str:
        return self._url

    async def goto(self, url: str) -> None:
        self._url = url
        document = self.routes.get(url)
        if document is None:
            parts = urlsplit(url)
            document = self.routes.get(urlunsplit((parts.scheme, parts.netloc, parts.path, "", "")))
        if document is not None:
            self.soup = BeautifulSoup(document, "html.parser")
        else:
            logger.debug(f"No route registered for {url}, keeping current document")

    async def title(self) -> str:
        if self.soup.title and self.soup.title.string:
            return self.soup.title.string.strip()
        return ""

    async def content(self) -> str:
        return str(self.soup)

    async def wait_for_load_state(self, state: str = "load") -> None:
        return None

    async def press(self, key: str) -> None:
        self._record("press", None, key)

    # -- queries --

    async def locate(self, selector: str) -> List[ElementRef]:
        return self._wrap(self.soup.select(selector))

    async def by_role(self, role: str, name: Optional[TextPattern] = None) -> List[ElementRef]:
        return self._wrap(self._role_matches(self.soup, role, name))

    async def by_text(self, pattern: TextPattern) -> List[ElementRef]:
        return self._wrap(self._text_matches(self.soup, pattern))

    async def wait_for(
        self,
        selector: str,
        state: str = "visible",
        timeout: Optional[float] = None
    ) -> Optional[ElementRef]:
        if state not in WAIT_STATES:
            raise ValueError(f"Unknown wait state: {state}")
        matches = self.soup.select(selector)
        visible = [tag for tag in matches if _is_visible(tag)]

        if state == "visible" and visible:
            return SnapshotElement(visible[0], self)
        if state == "attached" and matches:
            return SnapshotElement(matches[0], self)
        if state == "hidden" and not visible:
            return None
        if state == "detached" and not matches:
            return None
        raise ResolutionTimeout(selector, state, timeout)

    async def wait_for_role(
        self,
        role: str,
        name: Optional[TextPattern] = None,
        state: str = "visible",
        timeout: Optional[float] = None
    ) -> ElementRef:
        for tag in self._role_matches(self.soup, role, name):
            if state != "visible" or _is_visible(tag):
                return SnapshotElement(tag, self)
        raise ResolutionTimeout(f"role={role} name={name}", state, timeout)

    # -- internals --

    def _wrap(self, tags: List[Tag]) -> List[ElementRef]:
        return [SnapshotElement(tag, self) for tag in tags]

    def _record(self, action: str, element: Optional[SnapshotElement], value: Optional[str] = None):
        entry = {
            "action": action,
            "tag": element.tag.name if element else None,
            "text": normalize_whitespace(element.tag.get_text()) if element else "",
            "value": value,
        }
        self.actions.append(entry)

    def _role_matches(self, root: Tag, role: str, name: Optional[TextPattern]) -> List[Tag]:
        selector = ROLE_SELECTORS.get(role, f"[role={role}]")
        pattern = compile_pattern(name) if name is not None else None
        matches = []
        for tag in root.select(selector):
            if not _role_of(tag, role) or not _is_rendered(tag):
                continue
            if pattern is not None and not pattern.search(_accessible_name(tag)):
                continue
            matches.append(tag)
        return matches

    def _text_matches(self, root: Tag, pattern: TextPattern) -> List[Tag]:
        regex = compile_pattern(pattern)

        def matches(tag: Tag) -> bool:
            return bool(regex.search(_rendered_text(tag)))

        found = []
        for tag in root.find_all(True):
            if not _is_rendered(tag) or not matches(tag):
                continue
            # Innermost only: skip when a child element carries the match
            if any(matches(child) for child in tag.find_all(True, recursive=False) if _is_rendered(child)):
                continue
            found.append(tag)
        return found

    async def _submit_enclosing_form(self, tag: Tag) -> None:
        form = tag.find_parent("form")
        if form is None or not form.get("action"):
            return
        fields = {
            field.get("name"): field.get("value") or ""
            for field in form.find_all("input")
            if field.get("name") and not field.has_attr("disabled")
        }
        target = urljoin(self._url, form["action"])
        if fields:
            target = f"{target}?{urlencode(fields)}"
        await self.goto(target)
