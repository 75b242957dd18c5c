"""
Root conftest.py for the harness test suite.
Registers markers shared by the core and UI tests.
"""


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers",
        "needs_browser: Tests that launch Chromium through Playwright"
    )
    config.addinivalue_line(
        "markers",
        "needs_server: Tests that require a running development server (TEST_SERVER_URL)"
    )
