"""Send, wait for quiescence, narrow and check against the fake client"""

import pytest

from fake_client import BASE_URL
from harness.exceptions import NarrowStateError
from harness.narrow import NarrowState
from harness.scenario import (
    OTHER_SUBJECT,
    PAIR_NAMES,
    PAIR_RECIPIENTS,
    SINGLE_NAMES,
    SINGLE_RECIPIENT,
    STREAM,
    SUBJECT,
    paragraphs,
    private_message,
    private_heading,
    queue_messaging,
    stream_heading,
    stream_message,
)

pytestmark = pytest.mark.needs_browser

FIRST_BATCH = [
    ("stream", stream_message(SUBJECT, "test message A")),
    ("stream", stream_message(SUBJECT, "test message B")),
    ("stream", stream_message(OTHER_SUBJECT, "test message C")),
    ("private", private_message(PAIR_RECIPIENTS, "personal A")),
    ("private", private_message(PAIR_RECIPIENTS, "personal B")),
    ("private", private_message(SINGLE_RECIPIENT, "personal C")),
]


def send_all(harness, messages):
    for kind, params in messages:
        harness.sender.wait_and_send(kind, params)


def wait_for_receive(harness):
    harness.browser.wait_until(
        lambda: harness.tracker.is_quiescent(harness.config.idle_window_ms),
        "quiescence",
    )


class TestSendAndReceive:

    def test_home_shows_messages_in_send_order(self, harness, chat_server):
        send_all(harness, FIRST_BATCH)
        wait_for_receive(harness)

        assert harness.checks.expect_tail("home", [
            stream_heading(SUBJECT),
            stream_heading(OTHER_SUBJECT),
            private_heading(PAIR_NAMES),
            private_heading(SINGLE_NAMES),
        ], paragraphs(
            "test message A", "test message B", "test message C",
            "personal A", "personal B", "personal C",
        )), harness.report.summary()
        assert len(chat_server.sent) == 6

    def test_get_updates_responses_count_as_activity(self, harness, chat_server):
        send_all(harness, FIRST_BATCH[:1])
        wait_for_receive(harness)

        assert chat_server.update_polls >= 1
        # One mark for the send plus at least one for the update poll
        assert harness.tracker.activity_count >= 2

    def test_checking_before_delivery_reports_short_table(self, harness):
        harness.sender.send_message("stream", stream_message(SUBJECT, "test message A"))

        # Update poll has not returned yet, the table is still empty
        assert not harness.checks.expect_tail("home", [stream_heading(SUBJECT)],
                                              paragraphs("test message A"))
        assert harness.report.failures[0].actual == []


class TestNarrowing:

    @pytest.fixture
    def delivered(self, harness):
        send_all(harness, FIRST_BATCH)
        wait_for_receive(harness)
        return harness

    def test_stream_narrow_then_un_narrow(self, delivered):
        harness = delivered
        harness.narrows.narrow_to_stream(STREAM)
        harness.narrows.wait_until_ready()

        assert harness.checks.expect_tail("filtered", [
            stream_heading(SUBJECT),
            stream_heading(OTHER_SUBJECT),
        ], paragraphs("test message A", "test message B", "test message C"))

        harness.narrows.un_narrow()
        harness.narrows.wait_until_ready()

        assert harness.checks.expect_tail("home", [
            private_heading(PAIR_NAMES),
            private_heading(SINGLE_NAMES),
        ], paragraphs("personal A", "personal B", "personal C"))
        assert harness.report.passed, harness.report.summary()

    def test_subject_narrow(self, delivered):
        harness = delivered
        harness.narrows.narrow_to_subject(STREAM, SUBJECT)
        harness.narrows.wait_until_ready()

        assert harness.checks.expect_tail("filtered", [stream_heading(SUBJECT)],
                                          paragraphs("test message A", "test message B"))
        assert harness.narrows.state is NarrowState.SUBJECT

    def test_conversation_narrow_excludes_other_conversations(self, delivered):
        harness = delivered
        harness.narrows.narrow_to_conversation(SINGLE_NAMES)
        harness.narrows.wait_until_ready()

        rendered = harness.extractor.extract("filtered")
        assert rendered.bodies == paragraphs("personal C")

    def test_second_narrow_requires_un_narrow(self, delivered):
        delivered.narrows.narrow_to_stream(STREAM)
        with pytest.raises(NarrowStateError):
            delivered.narrows.narrow_to_stream(STREAM)


class TestFullMessagingScenario:

    def test_scenario_passes_against_fake_client(self, harness, chat_server):
        scenario = queue_messaging(harness, harness.new_scenario())
        report = scenario.run()

        assert report.passed, report.summary()
        assert scenario.completed == len(scenario.steps)
        assert [m["content"] for m in chat_server.sent][-2:] == ["test message D", "personal D"]
        assert harness.narrows.state is NarrowState.CONVERSATION
        assert harness.browser.url == BASE_URL
