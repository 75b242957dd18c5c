"""Compose and send messages through the web client"""

import logging
from typing import Dict

from . import constants
from .quiescence import QuiescenceTracker

logger = logging.getLogger(__name__)

MESSAGE_KINDS = ("stream", "private")

# Compose form fields each message kind must fill
REQUIRED_FIELDS = {
    "stream": ("stream", "subject", "content"),
    "private": ("recipient", "content"),
}


def validate_params(kind: str, params: Dict[str, str]):
    if kind not in MESSAGE_KINDS:
        raise ValueError(f"Unknown message kind {kind!r}, expected one of {MESSAGE_KINDS}")
    missing = [name for name in REQUIRED_FIELDS[kind] if name not in params]
    if missing:
        raise ValueError(f"{kind} message is missing {', '.join(missing)}")
    if not params["content"]:
        raise ValueError("Message content must not be empty")


class MessageSender:
    """Action driver for stream and private messages"""

    def __init__(self, browser, tracker: QuiescenceTracker):
        self.browser = browser
        self.tracker = tracker
        self.sent = 0

    def send_message(self, kind: str, params: Dict[str, str]):
        """Open the compose box for `kind`, fill it and submit

        Activity is marked before the click, not on completion.
        """
        validate_params(kind, params)
        self.tracker.mark_activity(source="send")

        self.browser.click(constants.COMPOSE_BUTTON_TEMPLATE.format(kind=kind))
        self.browser.fill_form(constants.COMPOSE_FORM, params)
        self.browser.click(constants.COMPOSE_SEND_BUTTON)
        self.sent += 1
        logger.debug(f"Sent {kind} message #{self.sent}: {params['content']!r}")

    def wait_and_send(self, kind: str, params: Dict[str, str]):
        """Wait for any previous send to finish, then send

        Blocks right away. Inside a Scenario the same wait is queued as a
        step instead (scenario.queue_send), so its timeout is handled with
        every other step.
        """
        self.browser.wait_for_selector(constants.COMPOSE_SEND_ENABLED, state="attached")
        self.send_message(kind, params)
