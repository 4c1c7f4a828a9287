"""
Domain knowledge: synonym sets, key aliases, regions and selector lists.
"""

from .synonyms import (
    SPEC_KEY_ALIASES,
    HEADER,
    FOOTER,
    NAVIGATION_SCOPE,
    DEALER_LOCATOR,
    WHERE_TO_BUY,
    ZIP_INPUT_SELECTORS,
    HEALTHY_STATUSES,
    LINK_TEXT_DENYLIST,
)

__all__ = [
    "SPEC_KEY_ALIASES",
    "HEADER",
    "FOOTER",
    "NAVIGATION_SCOPE",
    "DEALER_LOCATOR",
    "WHERE_TO_BUY",
    "ZIP_INPUT_SELECTORS",
    "HEALTHY_STATUSES",
    "LINK_TEXT_DENYLIST",
]
