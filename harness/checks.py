"""Assertions over rendered message tables

Mismatches are recorded on the CheckReport and never raised, so one bad
comparison does not stop the rest of the scenario.
"""

import logging
import re
from typing import List, Optional, Sequence

from . import constants
from .browser import first_status_in_chain
from .extractor import resolve_table_id
from .normalize import normalize_spaces
from .report import CheckReport

logger = logging.getLogger(__name__)


def tail(items: Sequence[str], count: int) -> List[str]:
    """Last `count` items; shorter when fewer exist, empty for count 0"""
    if count <= 0:
        return []
    return list(items[-count:])


class MessageChecks:
    """Assertion engine for the home and filtered tables"""

    def __init__(self, browser, extractor, report: Optional[CheckReport] = None):
        self.browser = browser
        self.extractor = extractor
        self.report = report if report is not None else CheckReport()

    def check_visible(self, selector: str, name: str) -> bool:
        visible = self.browser.is_visible(selector)
        return self.report.record(name, visible, expected="visible",
                                  actual="visible" if visible else "not visible")

    def check_match(self, value: str, pattern: str, name: str) -> bool:
        matched = re.search(pattern, value) is not None
        return self.report.record(name, matched, expected=pattern, actual=value)

    def check_url_match(self, pattern: str, name: str) -> bool:
        return self.check_match(self.browser.url, pattern, name)

    def check_http_status(self, expected: int, response=None) -> bool:
        """Status of the first response in the last navigation's redirect chain"""
        if response is None:
            response = self.browser.last_response
        status = first_status_in_chain(response)
        return self.report.record(f"HTTP status is {expected}", status == expected,
                                  expected=expected, actual=status)

    def expect_tail(self, table: str, headings: Sequence[str], bodies: Sequence[str]) -> bool:
        """Compare the last headings and bodies of a table with expectations

        Headings are whitespace-normalized, bodies are compared as exact
        markup. Each comparison is recorded as its own check.
        """
        table_id = resolve_table_id(table)
        self.check_visible(f"#{table_id}", f"{table_id} is visible")

        rendered = self.extractor.extract(table)
        actual_headings = [normalize_spaces(h) for h in tail(rendered.headings, len(headings))]
        actual_bodies = tail(rendered.bodies, len(bodies))

        headings_ok = self.report.record(
            f"Got expected message headings in {table_id}",
            actual_headings == list(headings),
            expected=list(headings),
            actual=actual_headings,
        )
        bodies_ok = self.report.record(
            f"Got expected message bodies in {table_id}",
            actual_bodies == list(bodies),
            expected=list(bodies),
            actual=actual_bodies,
        )
        return headings_ok and bodies_ok

    def sanity_check(self, table: str = "home"):
        """Check that every existing heading and body is well-formed"""
        rendered = self.extractor.extract(table)
        for heading in rendered.headings:
            self.check_match(normalize_spaces(heading), constants.WELL_FORMED_HEADING,
                             "Heading is well-formed")
        for body in rendered.bodies:
            self.check_match(body, constants.WELL_FORMED_BODY, "Body is well-formed")
        logger.debug(f"Sanity-checked {len(rendered)} messages in {table}")
