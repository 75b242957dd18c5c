"""Whitespace normalization for rendered headings"""

import re

# str patterns are Unicode-aware, so \s also covers non-breaking space
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_spaces(text: str) -> str:
    """Collapse every whitespace run to a single ordinary space

    innerText sometimes yields non-breaking spaces, and occasionally a
    different number of spaces than expected.
    """
    return _WHITESPACE_RUN.sub(" ", text)
