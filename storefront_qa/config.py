"""
Suite configuration.

Settings come from STOREFRONT_* environment variables; a .env file is
loaded first (existing variables win over the file).
"""

import logging
import os
from typing import Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel

from .knowledge.synonyms import HEALTHY_STATUSES, LINK_TEXT_DENYLIST

DEFAULT_BASE_URL = "https://www.boschtools.com/us/en/"

# env var -> SuiteSettings field
ENV_FIELDS = {
    "STOREFRONT_BASE_URL": "base_url",
    "STOREFRONT_HEADLESS": "headless",
    "STOREFRONT_PROBE_TIMEOUT": "probe_timeout",
    "STOREFRONT_WAIT_TIMEOUT": "wait_timeout",
    "STOREFRONT_NAV_TIMEOUT": "navigation_timeout",
    "STOREFRONT_LOG_LEVEL": "log_level",
}


class SuiteSettings(BaseModel):
    """Runtime settings for the page objects and the link checker"""
    base_url: str = DEFAULT_BASE_URL
    headless: bool = True
    probe_timeout: float = 10.0  # seconds
    wait_timeout: float = 5000  # ms
    navigation_timeout: float = 15000  # ms
    log_level: str = "INFO"
    healthy_statuses: Tuple[int, ...] = HEALTHY_STATUSES
    link_text_denylist: Tuple[str, ...] = LINK_TEXT_DENYLIST


def load_settings(env_file: Optional[str] = None) -> SuiteSettings:
    """
    Build SuiteSettings from the environment.

    Args:
        env_file: Path of a .env file (searched for when omitted)

    Returns:
        SuiteSettings
    """
    load_dotenv(env_file)

    values = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw != "":
            values[field_name] = raw
    return SuiteSettings(**values)


def configure_logging(level: str = "INFO") -> None:
    """Root handler for suite runs"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
