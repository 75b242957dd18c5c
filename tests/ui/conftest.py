"""Shared Playwright fixtures for UI tests with module-level isolation

Each test MODULE (file) gets its own browser instance, tests within a module
share it. Every test gets a fresh page wired to a fresh FakeChatServer.
"""

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from fake_client import BASE_URL, FakeChatServer
from harness.config import HarnessConfig
from harness.runner import Harness


@pytest.fixture(scope="module")  # One browser per test file/module
def browser():
    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium is not available: {e}")
        yield browser
        browser.close()


@pytest.fixture
def chat_server():
    return FakeChatServer()


@pytest.fixture
def page(browser, chat_server):
    """New context per test, already showing the fake client"""
    context = browser.new_context()
    page = context.new_page()
    chat_server.install(page)
    yield page
    context.close()


@pytest.fixture
def harness(page):
    harness = Harness(page, HarnessConfig(base_url=BASE_URL))
    harness.browser.goto(BASE_URL)
    return harness
