"""
Error Types

Failures raised by the resolver, the fact extractor, the link checker
and the page objects built on top of them.

Resolution errors carry a diagnostic payload (what the page DID contain)
so a failing run can be triaged without re-running it.
"""

from typing import Any, List, Optional


class StorefrontQAError(Exception):
    """Base class for all storefront_qa errors"""


class NotFound(StorefrontQAError):
    """
    Resolution exhausted every strategy without a match.

    Fatal to the current test step, not to the run.
    """

    def __init__(self, message: str, diagnostics: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.diagnostics: List[Any] = list(diagnostics or [])


class FactNotFound(NotFound):
    """No pattern produced an acceptable value for a key"""

    def __init__(self, key: str, diagnostics: Optional[List[Any]] = None):
        super().__init__(f"Could not find a value for key '{key}'", diagnostics)
        self.key = key


class ResolutionTimeout(NotFound):
    """A wait exceeded its budget. Handled exactly like NotFound."""

    def __init__(self, target: str, state: str, timeout: Optional[float]):
        super().__init__(f"Timed out after {timeout}ms waiting for '{target}' to be {state}")
        self.target = target
        self.state = state
        self.timeout = timeout


class ProbeError(StorefrontQAError):
    """Network-level failure while probing a link"""

    def __init__(self, url: str, cause: BaseException):
        super().__init__(f"Probe of {url} failed: {cause}")
        self.url = url
        self.cause = cause


class PageAssertionError(StorefrontQAError, AssertionError):
    """A page-object expectation did not hold"""


class LinkCheckFailed(PageAssertionError):
    """One or more links in a scanned region were unhealthy"""

    def __init__(self, failures: List[Any]):
        lines = []
        for record in failures:
            if record.error:
                lines.append(f'Link "{record.text}" failed to resolve or returned an error: {record.error}')
            else:
                lines.append(f'Link "{record.text}" at {record.url} failed with status: {record.status}')
        super().__init__(f"{len(failures)} unhealthy link(s):\n" + "\n".join(lines))
        self.failures = failures
