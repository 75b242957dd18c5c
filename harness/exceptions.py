"""Harness-fatal errors

Anything raised from here aborts the remaining scenario. Content mismatches
are never raised; they are recorded as failed checks instead.
"""


class HarnessError(Exception):
    """Base class for errors that mean the harness or client is broken"""


class ConfigError(HarnessError):
    """Invalid harness configuration"""


class WaitTimeoutError(HarnessError):
    """A wait did not resolve within its upper bound"""

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms}ms waiting for {description}")


class MissingElementError(HarnessError):
    """A required element was not present outside of a check"""


class ExtractionError(HarnessError):
    """Rendered message table could not be read consistently"""


class NarrowStateError(HarnessError):
    """Narrow action issued from a state that does not allow it"""


class BrowserError(HarnessError):
    """Playwright failed for a reason other than a timeout"""
