"""Narrowing the message view to a stream, subject or conversation"""

import enum
import logging
from typing import Iterable, Optional

from . import constants
from .exceptions import NarrowStateError

logger = logging.getLogger(__name__)


class NarrowState(enum.Enum):
    HOME = "home"
    STREAM = "stream"
    SUBJECT = "stream and subject"
    CONVERSATION = "private conversation"


def title_selector(title: str) -> str:
    """CSS selector for any element with exactly this title"""
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    return f'*[title="{escaped}"]'


def stream_title(stream: str) -> str:
    return constants.NARROW_STREAM_TITLE.format(stream=stream)


def subject_title(stream: str, subject: str) -> str:
    return constants.NARROW_SUBJECT_TITLE.format(stream=stream, subject=subject)


def conversation_title(names: Iterable[str]) -> str:
    return constants.NARROW_PRIVATE_TITLE.format(names=", ".join(names))


class NarrowController:
    """Issues narrow and un-narrow clicks and tracks the resulting state

    Clicking only starts the transition; the view is ready once the target
    table is visible, which the caller waits for with wait_until_ready().
    """

    def __init__(self, browser):
        self.browser = browser
        self.state = NarrowState.HOME
        self.description: Optional[str] = None

    @property
    def is_narrowed(self) -> bool:
        return self.state is not NarrowState.HOME

    @property
    def active_table(self) -> str:
        return constants.FILTERED_TABLE if self.is_narrowed else constants.HOME_TABLE

    def narrow_to_stream(self, stream: str):
        logger.info("Narrowing to stream")
        self._narrow(NarrowState.STREAM, stream_title(stream))

    def narrow_to_subject(self, stream: str, subject: str):
        logger.info("Narrowing to subject")
        self._narrow(NarrowState.SUBJECT, subject_title(stream, subject))

    def narrow_to_conversation(self, names: Iterable[str]):
        logger.info("Narrowing to personals")
        self._narrow(NarrowState.CONVERSATION, conversation_title(names))

    def un_narrow(self):
        if not self.is_narrowed:
            raise NarrowStateError("Cannot un-narrow: view is not narrowed")
        logger.info("Un-narrowing")
        self.browser.click(constants.UN_NARROW_BUTTON)
        self.state = NarrowState.HOME
        self.description = None

    def wait_until_ready(self):
        """Block until the table for the current state is shown"""
        self.browser.wait_for_selector(f"#{self.active_table}", state="visible")

    def _narrow(self, target: NarrowState, title: str):
        if self.is_narrowed:
            raise NarrowStateError(
                f"Cannot narrow to {target.value}: already narrowed ({self.description})"
            )
        self.browser.click(title_selector(title))
        self.state = target
        self.description = title
