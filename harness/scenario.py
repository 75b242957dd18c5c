"""The frontend scenario: log in, send, narrow and check the views

Runs against a development server populated with the standard fixture
users. Steps are queued first and executed by Scenario.run().
"""

import logging
from typing import Dict, Iterable

from . import constants
from .sequencer import Scenario

logger = logging.getLogger(__name__)

STREAM = "Verona"
SUBJECT = "frontend test"
OTHER_SUBJECT = "other subject"

PAIR_RECIPIENTS = "cordelia@humbughq.com, hamlet@humbughq.com"
SINGLE_RECIPIENT = "cordelia@humbughq.com"
PAIR_NAMES = ("Cordelia Lear", "King Hamlet")
SINGLE_NAMES = ("Cordelia Lear",)


def stream_message(subject: str, content: str) -> Dict[str, str]:
    return {"stream": STREAM, "subject": subject, "content": content}


def private_message(recipient: str, content: str) -> Dict[str, str]:
    return {"recipient": recipient, "content": content}


def stream_heading(subject: str) -> str:
    return f"{STREAM} | {subject}"


def private_heading(names: Iterable[str]) -> str:
    return "You and " + ", ".join(names)


def paragraphs(*contents: str):
    return [f"<p>{content}</p>" for content in contents]


def queue_send(harness, scenario: Scenario, kind: str, params: Dict[str, str]) -> Scenario:
    """Queue MessageSender.wait_and_send as a wait-for-element step"""
    return scenario.wait_for_selector(
        constants.COMPOSE_SEND_ENABLED,
        lambda: harness.sender.send_message(kind, params),
        state="attached",
        name=f"send {params['content']!r}",
    )


def queue_login(harness, scenario: Scenario) -> Scenario:
    """Open the site, follow the login link and log in"""
    config = harness.config
    browser = harness.browser
    checks = harness.checks

    def open_site():
        browser.goto(config.base_url)
        checks.check_http_status(302)
        checks.check_url_match(constants.ACCOUNTS_HOME_URL, "Redirected to /accounts/home")
        browser.click(constants.LOGIN_LINK)

    def log_in():
        logger.info("Logging in")
        browser.fill_form(
            constants.LOGIN_FORM,
            {"username": config.username, "password": config.password},
            submit=True,
        )

    scenario.then(open_site)
    scenario.then(log_in)
    return scenario


def queue_messaging(harness, scenario: Scenario) -> Scenario:
    """Send messages, narrow and un-narrow, checking the views after each"""
    checks = harness.checks
    sender = harness.sender
    narrows = harness.narrows

    def check_existing_and_send():
        checks.check_url_match(constants.HOME_PAGE_URL, "On home page")

        logger.info("Sanity-checking existing messages")
        checks.sanity_check("home")

        logger.info("Sending messages")
        sender.send_message("stream", stream_message(SUBJECT, "test message A"))

    def check_first_batch():
        checks.expect_tail("home", [
            stream_heading(SUBJECT),
            stream_heading(OTHER_SUBJECT),
            private_heading(PAIR_NAMES),
            private_heading(SINGLE_NAMES),
        ], paragraphs(
            "test message A",
            "test message B",
            "test message C",
            "personal A",
            "personal B",
            "personal C",
        ))

        logger.info("Sending more messages")
        sender.send_message("stream", stream_message(SUBJECT, "test message D"))

    def check_stream_narrow():
        checks.expect_tail("filtered", [
            stream_heading(SUBJECT),
            stream_heading(OTHER_SUBJECT),
            stream_heading(SUBJECT),
        ], paragraphs(
            "test message A",
            "test message B",
            "test message C",
            "test message D",
        ))
        narrows.un_narrow()

    def check_home_restored():
        checks.expect_tail("home", [
            stream_heading(SUBJECT),
            private_heading(PAIR_NAMES),
        ], paragraphs(
            "test message D",
            "personal D",
        ))
        narrows.narrow_to_subject(STREAM, SUBJECT)

    def check_subject_narrow():
        checks.expect_tail("filtered", [
            stream_heading(SUBJECT),
        ], paragraphs(
            "test message A",
            "test message B",
            "test message D",
        ))
        narrows.un_narrow()

    def check_conversation_narrow():
        checks.expect_tail("filtered", [
            private_heading(PAIR_NAMES),
        ], paragraphs(
            "personal A",
            "personal B",
            "personal D",
        ))

    home = f"#{constants.HOME_TABLE}"
    filtered = f"#{constants.FILTERED_TABLE}"

    scenario.wait_for_selector(home, check_existing_and_send)

    queue_send(harness, scenario, "stream", stream_message(SUBJECT, "test message B"))
    queue_send(harness, scenario, "stream", stream_message(OTHER_SUBJECT, "test message C"))
    queue_send(harness, scenario, "private", private_message(PAIR_RECIPIENTS, "personal A"))
    queue_send(harness, scenario, "private", private_message(PAIR_RECIPIENTS, "personal B"))
    queue_send(harness, scenario, "private", private_message(SINGLE_RECIPIENT, "personal C"))

    harness.wait_for_receive(scenario, check_first_batch)
    queue_send(harness, scenario, "private", private_message(PAIR_RECIPIENTS, "personal D"))

    harness.wait_for_receive(scenario, lambda: narrows.narrow_to_stream(STREAM))
    scenario.wait_for_selector(filtered, check_stream_narrow)
    scenario.wait_for_selector(home, check_home_restored)
    scenario.wait_for_selector(filtered, check_subject_narrow)
    scenario.wait_for_selector(home, lambda: narrows.narrow_to_conversation(PAIR_NAMES))
    scenario.wait_for_selector(filtered, check_conversation_narrow)

    # Left narrowed to the conversation
    return scenario


def build_frontend_scenario(harness) -> Scenario:
    scenario = harness.new_scenario()
    queue_login(harness, scenario)
    return queue_messaging(harness, scenario)
