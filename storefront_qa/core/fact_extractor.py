"""
Fact Extractor

Pulls the value of a semantic key ("rpm", "weight") off a page whose
markup is not known in advance.

Pattern Order (first acceptable value wins):
1. Tabular        - <tr> with the key in its <th> or first <td>
2. Definition list - <dt> with the key, value in the next <dd>
3. Label sibling  - text node with the key, value in the next sibling
                    or in the parent's text after the key
4. Raw text       - regex over the page markup (last resort)

A value that is empty or still contains the matched alias is the label
leaking into the value; it is rejected and the search moves on.
"""

import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .dom import ElementRef, PageHandle
from .errors import FactNotFound
from .models import Fact, FactSource
from ..knowledge.synonyms import SPEC_KEY_ALIASES

# Configure logging
logger = logging.getLogger(__name__)

Match = Tuple[str, str]  # (value, alias)


class FactExtractor:
    """
    Resolves key/value facts across several structural patterns.

    The alias table is configuration: {canonical_key: [alias, ...]}.
    """

    def __init__(self, page: PageHandle, aliases: Optional[Mapping[str, Sequence[str]]] = None):
        """
        Initialize extractor.

        Args:
            page: Page handle to read from
            aliases: Key alias table (defaults to SPEC_KEY_ALIASES)
        """
        self.page = page
        self.aliases = aliases if aliases is not None else SPEC_KEY_ALIASES

    def expand_aliases(self, key: str) -> List[str]:
        """Key as given, upper, lower, then table aliases; de-duplicated ignoring case"""
        candidates = [key, key.upper(), key.lower()]
        candidates.extend(self.aliases.get(key.lower(), ()))

        seen = set()
        expanded = []
        for candidate in candidates:
            candidate = candidate.strip()
            if candidate and candidate.lower() not in seen:
                seen.add(candidate.lower())
                expanded.append(candidate)
        return expanded

    @staticmethod
    def _accept(value: Optional[str], alias: str) -> Optional[str]:
        value = (value or "").strip()
        if not value or alias.lower() in value.lower():
            return None
        return value

    # ==================== Entry Points ====================

    async def extract(self, key: str) -> Fact:
        """
        Extract a fact for a key.

        Args:
            key: Semantic key, e.g. "rpm"

        Returns:
            Fact with the value and the pattern that produced it

        Raises:
            FactNotFound: every pattern and alias failed; diagnostics list
                the table rows and definition-list pairs that were seen
        """
        aliases = self.expand_aliases(key)

        strategies = (
            (FactSource.TABULAR, self._from_table),
            (FactSource.DEFINITION_LIST, self._from_definition_list),
            (FactSource.LABEL_SIBLING, self._from_label),
            (FactSource.RAW_TEXT, self._from_raw_text),
        )
        for source, strategy in strategies:
            match = await strategy(aliases)
            if match:
                value, alias = match
                logger.info(f"Found '{key}' = '{value}' via {source.value} (alias '{alias}')")
                return Fact(key=key, value=value, source=source, alias=alias)

        raise FactNotFound(key, await self.observed_pairs())

    async def get_value(self, key: str) -> Optional[str]:
        """Value for a key, or None after logging what the page did contain"""
        try:
            return (await self.extract(key)).value
        except FactNotFound as e:
            logger.info(f"Could not find spec for key '{key}'. Found specs: {e.diagnostics}")
            return None

    # ==================== 1. Tabular ====================

    async def _row_labels(self, row: ElementRef) -> Tuple[str, str]:
        headers = await row.locate("th")
        cells = await row.locate("td")
        header_text = (await headers[0].text_content()).strip() if headers else ""
        data_text = (await cells[0].text_content()).strip() if cells else ""
        return header_text, data_text

    async def _from_table(self, aliases: List[str]) -> Optional[Match]:
        for row in await self.page.locate("tr"):
            header_text, data_text = await self._row_labels(row)
            for alias in aliases:
                needle = alias.lower()
                # In <th>label</th><td>value</td> rows the first data cell is the
                # value itself; _accept() rejecting alias echoes is what keeps a
                # value-only hit from surfacing
                if needle not in header_text.lower() and needle not in data_text.lower():
                    continue

                cells = await row.locate("td")
                if cells:
                    value = self._accept(await cells[-1].text_content(), alias)
                    if value:
                        return value, alias

                headers = await row.locate("th")
                if headers:
                    following = await self._following_sibling(headers[0], "td")
                    if following:
                        value = self._accept(await following.text_content(), alias)
                        if value:
                            return value, alias
        return None

    # ==================== 2. Definition List ====================

    async def _from_definition_list(self, aliases: List[str]) -> Optional[Match]:
        for term in await self.page.locate("dt"):
            term_text = (await term.text_content()).strip().lower()
            for alias in aliases:
                if alias.lower() not in term_text:
                    continue
                definition = await self._following_sibling(term, "dd", stop_at="dt")
                if definition:
                    value = self._accept(await definition.text_content(), alias)
                    if value:
                        return value, alias
        return None

    # ==================== 3. Label Sibling ====================

    async def _from_label(self, aliases: List[str]) -> Optional[Match]:
        for alias in aliases:
            escaped = re.escape(alias)
            labels = await self.page.by_text(re.compile(escaped, re.I))
            if not labels:
                continue
            label = labels[0]

            sibling = await label.next_sibling()
            if sibling:
                value = self._accept(await sibling.text_content(), alias)
                if value:
                    return value, alias

            # Sibling held the label itself (or nothing): read past the label in the parent
            parent = await label.parent()
            if parent:
                text = await parent.text_content()
                found = re.search(rf"{escaped}[:\s]*([^\n]+)", text, re.I)
                if found:
                    value = self._accept(found.group(1), alias)
                    if value:
                        return value, alias
        return None

    # ==================== 4. Raw Text ====================

    async def _from_raw_text(self, aliases: List[str]) -> Optional[Match]:
        markup = await self.page.content()
        for alias in aliases:
            found = re.search(rf"{re.escape(alias)}\s*:?\s*([^<\n]+)", markup, re.I)
            if found:
                value = self._accept(found.group(1), alias)
                if value:
                    return value, alias
        return None

    # ==================== Helpers ====================

    async def _following_sibling(
        self,
        element: ElementRef,
        tag: str,
        stop_at: Optional[str] = None
    ) -> Optional[ElementRef]:
        """First following sibling with a tag name, not crossing `stop_at`"""
        sibling = await element.next_sibling()
        while sibling is not None:
            name = await sibling.tag_name()
            if name == tag:
                return sibling
            if stop_at and name == stop_at:
                return None
            sibling = await sibling.next_sibling()
        return None

    async def observed_pairs(self) -> List[Dict[str, str]]:
        """Every table row and definition-list pair on the page, for triage"""
        pairs: List[Dict[str, str]] = []
        for row in await self.page.locate("tr"):
            header_text, data_text = await self._row_labels(row)
            pairs.append({"header": header_text, "data": data_text})

        for term in await self.page.locate("dt"):
            definition = await self._following_sibling(term, "dd", stop_at="dt")
            pairs.append({
                "term": (await term.text_content()).strip(),
                "definition": (await definition.text_content()).strip() if definition else "",
            })
        return pairs
