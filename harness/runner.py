"""Wiring of one harness run around a Playwright page"""

import logging
from typing import Optional

import httpx
from playwright.sync_api import Page, sync_playwright
from tenacity import (
    RetryError,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_delay,
    wait_exponential,
)

from . import constants
from .browser import BrowserSession
from .checks import MessageChecks
from .config import HarnessConfig
from .driver import MessageSender
from .exceptions import WaitTimeoutError
from .extractor import PageExtractor
from .narrow import NarrowController
from .quiescence import QuiescenceTracker
from .report import CheckReport
from .sequencer import Scenario

logger = logging.getLogger(__name__)


class Harness:
    """Owns the per-run state: quiescence tracker, report and collaborators"""

    def __init__(self, page: Page, config: HarnessConfig, tracker: Optional[QuiescenceTracker] = None):
        self.config = config
        self.browser = BrowserSession(page, timeout_ms=config.wait_timeout_ms,
                                      poll_interval_ms=config.poll_interval_ms)
        self.tracker = tracker if tracker is not None else QuiescenceTracker()
        self.report = CheckReport()

        # Marks activity as soon as Playwright reports a finished get_updates
        self.browser.on_request_finished(self.tracker.observer(constants.GET_UPDATES_PATTERN))

        self.extractor = PageExtractor(self.browser)
        self.checks = MessageChecks(self.browser, self.extractor, self.report)
        self.sender = MessageSender(self.browser, self.tracker)
        self.narrows = NarrowController(self.browser)

    def new_scenario(self) -> Scenario:
        return Scenario(self.browser, self.report, wait_timeout_ms=self.config.wait_timeout_ms)

    def wait_for_receive(self, scenario: Scenario, action=None) -> Scenario:
        """Queue a quiescence wait using the configured idle window"""
        return scenario.wait_for_quiescence(self.tracker, self.config.idle_window_ms, action)


def wait_for_server_ready(url: str, timeout_seconds: int) -> httpx.Response:
    """Poll the server with exponential backoff until it answers"""

    @retry(
        stop=stop_after_delay(timeout_seconds),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(httpx.RequestError),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
    )
    def probe() -> httpx.Response:
        # Redirects are part of what the scenario checks, so any answer counts
        return httpx.get(url, timeout=2.0, follow_redirects=False)

    try:
        return probe()
    except RetryError:
        raise WaitTimeoutError(f"server at {url}", timeout_seconds * 1000)


def run_scenario(config: HarnessConfig, build, wait_for_server: bool = True) -> CheckReport:
    """Launch Chromium, build a scenario with `build(harness)` and run it"""
    if wait_for_server:
        wait_for_server_ready(config.base_url, config.server_startup_timeout)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=config.headless)
        try:
            context = browser.new_context()
            page = context.new_page()
            harness = Harness(page, config)
            scenario = build(harness)
            report = scenario.run()
            context.close()
        finally:
            browser.close()
    return report
