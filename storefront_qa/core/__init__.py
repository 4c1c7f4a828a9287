"""
Core Locator Module

The resilient element-resolution core: page/element handle interface,
control resolver, fact extractor and link health checker.

Works against a live Playwright page or a static HTML snapshot.
"""

from .errors import (
    StorefrontQAError,
    NotFound,
    FactNotFound,
    ResolutionTimeout,
    ProbeError,
    PageAssertionError,
    LinkCheckFailed,
)
from .dom import PageHandle, ElementRef
from .models import (
    SynonymSet,
    Region,
    SearchScope,
    ANYWHERE,
    CandidateElement,
    Fact,
    FactSource,
    LinkRecord,
    LinkReport,
    LinkStatus,
)
from .control_resolver import ControlResolver
from .fact_extractor import FactExtractor
from .link_checker import LinkHealthChecker, join_url
from .snapshot_dom import SnapshotPage

__all__ = [
    "StorefrontQAError",
    "NotFound",
    "FactNotFound",
    "ResolutionTimeout",
    "ProbeError",
    "PageAssertionError",
    "LinkCheckFailed",
    "PageHandle",
    "ElementRef",
    "SynonymSet",
    "Region",
    "SearchScope",
    "ANYWHERE",
    "CandidateElement",
    "Fact",
    "FactSource",
    "LinkRecord",
    "LinkReport",
    "LinkStatus",
    "ControlResolver",
    "FactExtractor",
    "LinkHealthChecker",
    "join_url",
    "SnapshotPage",
]
