"""BrowserSession: error translation and predicate polling"""

from types import SimpleNamespace

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from harness.browser import BrowserSession, first_status_in_chain
from harness.exceptions import BrowserError, MissingElementError, WaitTimeoutError


class FakePage:
    def __init__(self):
        self.url = "http://localhost:9981/"
        self.timeouts = []
        self.handlers = {}
        self.fail_selectors = set()
        self.broken_selectors = set()

    def click(self, selector, timeout=None):
        if selector in self.fail_selectors:
            raise PlaywrightTimeoutError(f"waiting for {selector}")

    def fill(self, selector, value, timeout=None):
        if selector in self.broken_selectors:
            raise PlaywrightError("Element is not an <input>, <textarea> or <select> element")
        if selector in self.fail_selectors:
            raise PlaywrightTimeoutError(f"waiting for {selector}")

    def wait_for_selector(self, selector, state="visible", timeout=None):
        if selector in self.fail_selectors:
            raise PlaywrightTimeoutError(f"waiting for {selector}")

    def is_visible(self, selector):
        if selector in self.broken_selectors:
            raise PlaywrightError("Execution context was destroyed")
        return True

    def wait_for_timeout(self, ms):
        self.timeouts.append(ms)

    def on(self, event, handler):
        self.handlers[event] = handler


@pytest.fixture
def page():
    return FakePage()


class TestErrorTranslation:

    def test_click_timeout_is_missing_element(self, page):
        page.fail_selectors.add("#compose-send-button")
        with pytest.raises(MissingElementError):
            BrowserSession(page).click("#compose-send-button")

    def test_missing_form_field(self, page):
        page.fail_selectors.add('form#login [name="username"]')
        with pytest.raises(MissingElementError):
            BrowserSession(page).fill_form("form#login", {"username": "iago"})

    def test_wait_for_selector_timeout(self, page):
        page.fail_selectors.add("#zfilt")
        with pytest.raises(WaitTimeoutError) as excinfo:
            BrowserSession(page, timeout_ms=1234).wait_for_selector("#zfilt")
        assert excinfo.value.timeout_ms == 1234

    def test_non_timeout_fill_error_is_browser_error(self, page):
        page.broken_selectors.add('form#compose [name="content"]')
        with pytest.raises(BrowserError) as excinfo:
            BrowserSession(page).fill_form("form#compose", {"content": "personal A"})
        assert "Element is not an <input>" in str(excinfo.value)

    def test_destroyed_context_during_visibility_check(self, page):
        page.broken_selectors.add("#zhome")
        with pytest.raises(BrowserError):
            BrowserSession(page).is_visible("#zhome")


class TestWaitUntil:

    def test_polls_through_the_page_until_true(self, page):
        answers = iter([False, False, True])
        BrowserSession(page, poll_interval_ms=50).wait_until(lambda: next(answers), "third poll")

        assert len(page.timeouts) == 2
        assert round(page.timeouts[0]) == 50

    def test_gives_up_after_timeout(self, page):
        session = BrowserSession(page, timeout_ms=20, poll_interval_ms=1)
        with pytest.raises(WaitTimeoutError) as excinfo:
            session.wait_until(lambda: False, "never")
        assert "never" in str(excinfo.value)


class TestResponses:

    def test_request_finished_callback_receives_url(self, page):
        urls = []
        BrowserSession(page).on_request_finished(urls.append)
        page.handlers["requestfinished"](SimpleNamespace(url="http://localhost:9981/json/get_updates"))

        assert urls == ["http://localhost:9981/json/get_updates"]

    def test_first_status_without_redirect(self):
        request = SimpleNamespace(redirected_from=None, response=lambda: SimpleNamespace(status=200))
        assert first_status_in_chain(SimpleNamespace(request=request)) == 200

    def test_first_status_of_nothing(self):
        assert first_status_in_chain(None) is None
