"""
Link Health Checker

Scans every anchor inside a page region and probes it with a HEAD
request, without navigating the page.

Rules:
- Empty, '#', mailto:, tel: and javascript: hrefs are skipped
- Links whose text hits the denylist ("subscribe") are skipped
- Relative hrefs are joined to the base URL with exactly one '/'
- 200/204/301/302/403 are healthy, any other status fails
- A probe that raises (timeout, DNS, refused) is an error, never a skip

Probes run concurrently and are joined before reporting; the report
keeps DOM order, not completion order.
"""

import asyncio
import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence
from urllib.parse import urlsplit

import httpx

from .dom import PageHandle
from .errors import LinkCheckFailed, ProbeError
from .models import LinkRecord, LinkReport, LinkStatus
from ..knowledge.synonyms import HEALTHY_STATUSES, LINK_TEXT_DENYLIST

# Configure logging
logger = logging.getLogger(__name__)

SKIP_PREFIXES = ("mailto:", "tel:", "javascript:")

_ABSOLUTE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def join_url(base_url: str, href: str) -> str:
    """
    Make an href absolute.

    Relative paths hang off the base URL (including its path), with or
    without a leading slash, so "about" and "/about" under
    https://example.com/us/en/ both give https://example.com/us/en/about.
    """
    href = href.strip()
    if _ABSOLUTE.match(href):
        return href
    if href.startswith("//"):
        scheme = urlsplit(base_url).scheme or "https"
        return f"{scheme}:{href}"
    return f"{base_url.rstrip('/')}/{href.lstrip('/')}"


class LinkHealthChecker:
    """
    Checks that the links in a region resolve.

    Features:
    - Explicit skip rules recorded as "skipped", not dropped
    - Concurrent HEAD probes with a per-probe timeout
    - Injectable httpx.AsyncClient (tests use httpx.MockTransport)
    """

    DEFAULT_TIMEOUT = 10.0  # seconds, per probe
    DEFAULT_WAIT_TIMEOUT = 15000  # ms, for the region to attach

    def __init__(
        self,
        page: PageHandle,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        healthy_statuses: Sequence[int] = HEALTHY_STATUSES,
        text_denylist: Sequence[str] = LINK_TEXT_DENYLIST,
        wait_timeout: float = DEFAULT_WAIT_TIMEOUT
    ):
        """
        Initialize link checker.

        Args:
            page: Page handle to read anchors from
            client: Optional shared httpx client (not closed by the checker)
            timeout: Per-probe timeout in seconds
            healthy_statuses: Status codes counted as healthy
            text_denylist: Link text fragments that mark a link as skipped
            wait_timeout: How long to wait for the region, in milliseconds
        """
        self.page = page
        self.client = client
        self.timeout = timeout
        self.healthy_statuses = frozenset(healthy_statuses)
        self.text_denylist = tuple(word.lower() for word in text_denylist)
        self.wait_timeout = wait_timeout

    def skip_reason(self, href: Optional[str], text: str) -> Optional[str]:
        """Why a link is not probed, or None when it should be"""
        if not href or href.strip() in ("", "#"):
            return "empty or placeholder href"
        lowered = href.strip().lower()
        for prefix in SKIP_PREFIXES:
            if lowered.startswith(prefix):
                return f"{prefix} link"
        text_lower = text.lower()
        for word in self.text_denylist:
            if word in text_lower:
                return f"non-navigational link text ({word})"
        return None

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.client is not None:
            yield self.client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=False) as client:
            yield client

    # ==================== Scanning ====================

    async def check_links(self, scope: str = "footer", base_url: Optional[str] = None) -> LinkReport:
        """
        Probe every anchor with an href inside a region.

        Args:
            scope: CSS selector of the region
            base_url: Base for relative hrefs (defaults to the page URL)

        Returns:
            LinkReport in DOM order

        Raises:
            ResolutionTimeout: the region never attached
        """
        base_url = base_url or self.page.url
        await self.page.wait_for(scope, state="attached", timeout=self.wait_timeout)

        # One query, so an anchor under nested region matches is listed once.
        # Everything is read before probing; probing never touches the page.
        links = []
        for anchor in await self.page.locate(f":is({scope}) a[href]"):
            href = await anchor.get_attribute("href")
            text = (await anchor.text_content()).strip() or "No Text"
            links.append((href, text))

        async with self._session() as client:
            records = await asyncio.gather(*(
                self._check_one(client, base_url, href, text) for href, text in links
            ))

        report = LinkReport(scope=scope, base_url=base_url, records=list(records))
        logger.info(f"All {scope} link status checks completed: {report.summary()}")
        return report

    async def verify_links(self, scope: str = "footer", base_url: Optional[str] = None) -> LinkReport:
        """check_links(), raising LinkCheckFailed when any link is unhealthy"""
        report = await self.check_links(scope, base_url)
        if report.failed:
            raise LinkCheckFailed(report.failed)
        return report

    async def _check_one(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        href: Optional[str],
        text: str
    ) -> LinkRecord:
        reason = self.skip_reason(href, text)
        if reason:
            logger.info(f"Skipping link: {text} ({href}) - {reason}")
            return LinkRecord(url=href or "", text=text, status=LinkStatus.SKIPPED, healthy=True)

        url = join_url(base_url, href)
        return await self.probe(client, url, text)

    async def probe(self, client: httpx.AsyncClient, url: str, text: str = "") -> LinkRecord:
        """HEAD one URL and classify the outcome"""
        try:
            response = await client.head(url, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = ProbeError(url, e)
            logger.error(f'FAIL: Link "{text}" at {url} failed to fetch: {e}')
            return LinkRecord(url=url, text=text, status=LinkStatus.ERROR, healthy=False, error=str(error))

        status = response.status_code
        healthy = status in self.healthy_statuses
        if healthy:
            logger.info(f'PASS: Link "{text}" ({url}) returned status {status}')
        else:
            logger.warning(f'FAIL: Link "{text}" at {url} failed with status: {status}')
        return LinkRecord(url=url, text=text, status=status, healthy=healthy)
