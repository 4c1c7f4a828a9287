"""
Storefront QA

End-to-end checks for a retail storefront, built on a resilient
locator core that:
- Resolves controls from ordered synonyms and page regions
- Extracts key/value facts from tables, lists, labels or raw text
- Probes every link in a region concurrently
- Runs against a live Playwright page or a saved HTML snapshot
"""

from .core import (
    ControlResolver,
    FactExtractor,
    LinkHealthChecker,
    SnapshotPage,
    SynonymSet,
    SearchScope,
    Region,
    Fact,
    FactSource,
    LinkRecord,
    LinkReport,
    NotFound,
    FactNotFound,
    ProbeError,
    LinkCheckFailed,
)
from .config import SuiteSettings, load_settings, configure_logging

__all__ = [
    # Core
    "ControlResolver",
    "FactExtractor",
    "LinkHealthChecker",
    "SnapshotPage",
    "SynonymSet",
    "SearchScope",
    "Region",
    "Fact",
    "FactSource",
    "LinkRecord",
    "LinkReport",
    # Errors
    "NotFound",
    "FactNotFound",
    "ProbeError",
    "LinkCheckFailed",
    # Config
    "SuiteSettings",
    "load_settings",
    "configure_logging",
]

__version__ = "1.0.0"
