"""Read rendered message tables out of the DOM"""

import logging
from dataclasses import dataclass, field
from typing import List

from . import constants
from .exceptions import ExtractionError

logger = logging.getLogger(__name__)

# Evaluated in the page. Headings use innerText (what the user sees), bodies
# use innerHTML (the rendered markup). A missing table reads as empty; the
# visibility check reports it.
EXTRACT_JS = """
([tableId, headingSelector, bodySelector]) => {
    const table = document.getElementById(tableId);
    if (!table) return {headings: [], bodies: []};
    return {
        headings: Array.from(table.querySelectorAll(headingSelector), el => el.innerText),
        bodies: Array.from(table.querySelectorAll(bodySelector), el => el.innerHTML)
    };
}
"""


@dataclass
class RenderedMessages:
    """Headings (one per conversation block) and bodies of one table, oldest first"""

    table: str
    headings: List[str] = field(default_factory=list)
    bodies: List[str] = field(default_factory=list)

    def __len__(self):
        return len(self.bodies)


def resolve_table_id(table: str) -> str:
    """Map a logical table name (home/filtered) to its element id"""
    return constants.TABLE_IDS.get(table, table)


class PageExtractor:
    """Extracts headings and bodies through a BrowserSession"""

    def __init__(self, browser):
        self.browser = browser

    def extract(self, table: str) -> RenderedMessages:
        table_id = resolve_table_id(table)
        raw = self.browser.evaluate(
            EXTRACT_JS,
            [table_id, constants.HEADING_SELECTOR, constants.BODY_SELECTOR],
        )
        if not isinstance(raw, dict):
            raise ExtractionError(f"Extraction of #{table_id} returned {raw!r}")
        return build_rendered(table, raw.get("headings"), raw.get("bodies"))


def build_rendered(table: str, headings, bodies) -> RenderedMessages:
    """Validate raw extraction output"""
    if headings is None or bodies is None:
        raise ExtractionError(f"Extraction of {table} returned no data")

    # One recipient row heads each run of consecutive messages in the same
    # conversation, so there can never be more headings than bodies, and
    # bodies never appear without a heading
    if len(headings) > len(bodies) or (bodies and not headings):
        raise ExtractionError(
            f"Table {table} has {len(headings)} headings but {len(bodies)} bodies"
        )

    logger.debug(f"Extracted {len(bodies)} messages from {table}")
    return RenderedMessages(table=table, headings=list(headings), bodies=list(bodies))
