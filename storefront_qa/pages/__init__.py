"""
Storefront page objects.

Each page object sequences resolver/extractor calls into one user
journey step and fails with PageAssertionError or NotFound.
"""

from .base_page import BasePage
from .homepage import Homepage
from .search_page import SearchPage
from .product_page import ProductPage
from .dealer_locator_page import DealerLocatorPage
from .service_page import ServicePage

__all__ = [
    "BasePage",
    "Homepage",
    "SearchPage",
    "ProductPage",
    "DealerLocatorPage",
    "ServicePage",
]
