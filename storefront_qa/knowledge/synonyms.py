"""
Synonyms and Aliases - Pre-seeded Knowledge for the Storefront

The domain dictionary the resolver and the extractor are configured with.
Kept as data so it can be extended and tested without touching the
resolution logic. All tables are read-only.
"""

import re
from types import MappingProxyType
from typing import Mapping, Tuple

from ..core.models import Region, SearchScope, SynonymSet, ANYWHERE


# ==================== Spec Key Aliases ====================

# canonical key (lower case) -> labels the same spec appears under
_SPEC_KEY_ALIASES = {
    "rpm": (
        "Speed",
        "No-load speed",
        "Speed (RPM)",
        "Rotational Speed",
        "No Load Speed",
        "Speed Range",
    ),
    "bpm": ("Impact rate", "Blows per minute", "Impact Rate (BPM)"),
    "weight": ("Tool weight", "Weight (with battery)", "Net weight"),
    "voltage": ("Volts", "Battery voltage", "Rated voltage"),
    "torque": ("Max torque", "Maximum torque", "Torque (hard)"),
    "chuck size": ("Chuck", "Chuck capacity", "Keyless chuck"),
}

SPEC_KEY_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType(_SPEC_KEY_ALIASES)


# ==================== Regions ====================

HEADER = Region("header", "header, nav")
FOOTER = Region("footer", "footer")

# Structural regions before the whole-page fallback
NAVIGATION_SCOPE = SearchScope.of(HEADER, FOOTER, ANYWHERE)


# ==================== Control Synonyms ====================

DEALER_LOCATOR = SynonymSet.of(
    "Dealer Locator/Where to Buy",
    re.compile(r"dealer locator", re.I),
    re.compile(r"where to buy", re.I),
    re.compile(r"find a dealer", re.I),
    re.compile(r"store locator", re.I),
    re.compile(r"find a store", re.I),
    re.compile(r"authorized sellers", re.I),
)

# One combined pattern: every phrase has the same priority on the PDP
WHERE_TO_BUY = SynonymSet.of(
    "Where to Buy / Dealer Locator",
    re.compile(r"where to buy|dealer locator|find a dealer|find store", re.I),
)

SPECIFICATION_SECTION = SynonymSet.of(
    "Specification section",
    re.compile(r"specification|specs|technical", re.I),
)

CONSENT_ACCEPT_NAME = re.compile(r"Accept All|Accept Cookies|OK", re.I)

SERVICE_OR_SUPPORT = SynonymSet.of(
    "Service/Support",
    re.compile(r"service|support", re.I),
)

TOOL_REPAIR = SynonymSet.of(
    "Tool Repair or Online Repair Service",
    re.compile(r"tool repair|online repair service", re.I),
)

SUBMIT_SEARCH = re.compile(r"search|find|go|submit", re.I)


# ==================== Selector Lists ====================

# Highest-signal attribute first, generic text input last
ZIP_INPUT_SELECTORS: Tuple[str, ...] = (
    'input[placeholder*="ZIP" i]',
    'input[aria-label*="ZIP" i]',
    'input[name*="zip" i]',
    'input[type="search"]',
    'input[type="text"]',
)

AUTO_SUGGEST_CONTAINERS: Tuple[str, ...] = (
    'ul[role="listbox"]',
    'ul',
    'div[role="listbox"]',
    'div.suggestions, div[aria-label*="suggestion"]',
    'div:has(li)',
)

FILTER_PANELS: Tuple[str, ...] = (
    'dialog[aria-label*="Filter" i]',
    'aside[aria-label*="Filter" i]',
    '[aria-label*="Refine" i]',
    '[aria-label*="facet" i]',
)

# Collapsed filter groups
EXPAND_CONTROLS = (
    'a[aria-expanded="false"], button[aria-expanded="false"], '
    '[role="button"][aria-expanded="false"]'
)

MODEL_NUMBER_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"Model\s*:?\s*([A-Za-z0-9-]+)", re.I),
    re.compile(r"SKU\s*:?\s*([A-Za-z0-9-]+)", re.I),
    re.compile(r"Part No\.?\s*:?\s*([A-Za-z0-9-]+)", re.I),
    re.compile(r"Product Number\s*:?\s*([A-Za-z0-9-]+)", re.I),
)

# Links whose text contains one of these are not navigational
LINK_TEXT_DENYLIST: Tuple[str, ...] = ("subscribe",)

HEALTHY_STATUSES: Tuple[int, ...] = (200, 204, 301, 302, 403)
