"""Thin adapter over a Playwright page

Translates Playwright timeouts into harness-fatal errors and gives the
core one place for every bounded wait.
"""

import logging
from typing import Callable, Dict, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, Response
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
)

from . import constants
from .exceptions import BrowserError, MissingElementError, WaitTimeoutError

logger = logging.getLogger(__name__)


class BrowserSession:
    """Page wrapper used by the sender, extractor, checks and narrows"""

    def __init__(self, page: Page, timeout_ms: int = constants.MAX_WAIT_MS,
                 poll_interval_ms: int = constants.POLL_INTERVAL_MS):
        self.page = page
        self.timeout_ms = timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self.last_response: Optional[Response] = None

    @property
    def url(self) -> str:
        return self.page.url

    def goto(self, url: str) -> Optional[Response]:
        """Navigate, retrying on timeouts"""
        try:
            return self._goto_with_retry(url)
        except TimeoutError:
            raise WaitTimeoutError(f"navigation to {url}", self.timeout_ms)

    @retry(
        stop=stop_after_attempt(constants.NAVIGATION_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(TimeoutError),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        reraise=True,
    )
    def _goto_with_retry(self, url: str) -> Optional[Response]:
        try:
            self.last_response = self.page.goto(url, timeout=self.timeout_ms)
        except PlaywrightTimeoutError as e:
            # tenacity retries on the builtin TimeoutError only
            raise TimeoutError(f"Navigation timeout: {e}")
        return self.last_response

    def click(self, selector: str):
        try:
            self.page.click(selector, timeout=self.timeout_ms)
        except PlaywrightTimeoutError:
            raise MissingElementError(f"Could not click {selector}")
        except PlaywrightError as e:
            raise BrowserError(f"Click on {selector} failed: {e}")

    def fill_form(self, form_selector: str, values: Dict[str, str], submit: bool = False):
        """Fill named fields of a form, optionally submitting it"""
        for name, value in values.items():
            field_selector = f'{form_selector} [name="{name}"]'
            try:
                self.page.fill(field_selector, value, timeout=self.timeout_ms)
            except PlaywrightTimeoutError:
                raise MissingElementError(f"Form field {field_selector} not found")
            except PlaywrightError as e:
                raise BrowserError(f"Could not fill {field_selector}: {e}")

        if submit:
            try:
                with self.page.expect_navigation(timeout=self.timeout_ms):
                    self.page.locator(form_selector).evaluate(
                        "form => form.requestSubmit ? form.requestSubmit() : form.submit()"
                    )
            except PlaywrightTimeoutError:
                raise WaitTimeoutError(f"submission of {form_selector}", self.timeout_ms)
            except PlaywrightError as e:
                raise BrowserError(f"Submission of {form_selector} failed: {e}")

    def is_visible(self, selector: str) -> bool:
        try:
            return self.page.is_visible(selector)
        except PlaywrightError as e:
            raise BrowserError(f"Visibility of {selector} unknown: {e}")

    def evaluate(self, expression: str, arg=None):
        try:
            return self.page.evaluate(expression, arg)
        except PlaywrightError as e:
            raise MissingElementError(f"Page evaluation failed: {e}")

    def wait_for_selector(self, selector: str, state: str = "visible",
                          timeout: Optional[int] = None):
        timeout = timeout or self.timeout_ms
        try:
            self.page.wait_for_selector(selector, state=state, timeout=timeout)
        except PlaywrightTimeoutError:
            raise WaitTimeoutError(f"{selector} to be {state}", timeout)
        except PlaywrightError as e:
            raise BrowserError(f"Waiting for {selector} failed: {e}")

    def wait_until(self, predicate: Callable[[], bool], description: str,
                   timeout: Optional[int] = None):
        """Poll a Python-side predicate until it holds

        Sleeping goes through the page so Playwright keeps dispatching
        network events (and with them quiescence updates) while we wait.
        """
        timeout = timeout or self.timeout_ms
        retrying = Retrying(
            stop=stop_after_delay(timeout / 1000),
            wait=wait_fixed(self.poll_interval_ms / 1000),
            retry=retry_if_result(lambda ready: not ready),
            sleep=self._pump_events,
        )
        try:
            retrying(predicate)
        except RetryError:
            raise WaitTimeoutError(description, timeout)

    def on_request_finished(self, callback: Callable[[str], None]):
        """Call back with the URL of every completed request"""
        self.page.on("requestfinished", lambda request: callback(request.url))

    def _pump_events(self, seconds: float):
        self.page.wait_for_timeout(seconds * 1000)


def first_status_in_chain(response: Optional[Response]) -> Optional[int]:
    """HTTP status of the first response in a redirect chain"""
    if response is None:
        return None
    request = response.request
    while request.redirected_from is not None:
        request = request.redirected_from
    first = request.response()
    return first.status if first is not None else None
