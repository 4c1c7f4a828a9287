"""
Core data types shared by the resolver, the extractor and the link checker.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Pattern, Tuple, Union

from .dom import ElementRef, TextPattern, compile_pattern


# ==================== Resolution ====================

@dataclass(frozen=True)
class SynonymSet:
    """
    Ordered match patterns for one semantic intent.

    Order encodes priority: the first pattern that matches anywhere wins.
    """
    intent: str
    patterns: Tuple[Pattern[str], ...]

    @classmethod
    def of(cls, intent: str, *patterns: TextPattern) -> "SynonymSet":
        """Build from literals (case-insensitive) and/or compiled patterns"""
        return cls(intent=intent, patterns=tuple(compile_pattern(p) for p in patterns))

    def __iter__(self):
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class Region:
    """A named part of the page. No selector means the whole page."""
    name: str
    selector: Optional[str] = None


ANYWHERE = Region("anywhere")


@dataclass(frozen=True)
class SearchScope:
    """Ordered regions to search, narrow structural regions first"""
    regions: Tuple[Region, ...]

    @classmethod
    def of(cls, *regions: Region) -> "SearchScope":
        return cls(regions=tuple(regions))

    @classmethod
    def anywhere(cls) -> "SearchScope":
        return cls(regions=(ANYWHERE,))

    def __iter__(self):
        return iter(self.regions)


@dataclass
class CandidateElement:
    """A resolved element and how it was found. Not cached across calls."""
    element: ElementRef
    region: str
    strategy: str  # link, button, tab, text, selector, input
    pattern: Optional[str] = None
    is_visible: bool = True
    is_enabled: bool = True


# ==================== Facts ====================

class FactSource(str, Enum):
    """Which structural pattern produced a fact"""
    TABULAR = "tabular"
    DEFINITION_LIST = "definition-list"
    LABEL_SIBLING = "label-sibling"
    RAW_TEXT = "raw-text"


@dataclass
class Fact:
    """A label/value pair pulled off a page"""
    key: str
    value: str
    source: FactSource
    alias: str

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "value": self.value, "source": self.source.value}


# ==================== Link Health ====================

class LinkStatus(str, Enum):
    """Non-numeric link outcomes"""
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class LinkRecord:
    """Outcome for one anchor. status is an HTTP code or a LinkStatus."""
    url: str
    text: str
    status: Union[int, LinkStatus]
    healthy: bool
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.status == LinkStatus.SKIPPED

    @property
    def failed(self) -> bool:
        return not self.skipped and not self.healthy


@dataclass
class LinkReport:
    """All link records of one scan, in DOM discovery order"""
    scope: str
    base_url: str
    records: List[LinkRecord] = field(default_factory=list)

    @property
    def healthy(self) -> List[LinkRecord]:
        return [r for r in self.records if r.healthy and not r.skipped]

    @property
    def failed(self) -> List[LinkRecord]:
        return [r for r in self.records if r.failed]

    @property
    def skipped(self) -> List[LinkRecord]:
        return [r for r in self.records if r.skipped]

    @property
    def passed(self) -> bool:
        return not self.failed

    def summary(self) -> Dict[str, Any]:
        return {
            "scope": self.scope,
            "total": len(self.records),
            "healthy": len(self.healthy),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
        }
