"""Command line entry point: run the frontend scenario and exit 0/1"""

import argparse
import logging
import sys
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError

from .config import HarnessConfig
from .exceptions import BrowserError, ConfigError, HarnessError
from .report import CheckReport
from .runner import run_scenario
from .scenario import build_frontend_scenario

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="harness",
        description="End-to-end test of the messaging web client against a running server",
    )
    parser.add_argument("--base-url", help="Server URL (env: HARNESS_BASE_URL)")
    parser.add_argument("--idle-window-ms", type=int,
                        help="Idle time before checking rendered messages (env: HARNESS_IDLE_WINDOW_MS)")
    parser.add_argument("--wait-timeout-ms", type=int,
                        help="Upper bound for every wait (env: HARNESS_WAIT_TIMEOUT_MS)")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--no-wait-for-server", action="store_true",
                        help="Do not poll the server before starting the browser")
    parser.add_argument("--log-level", help="Logging level (env: LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = HarnessConfig.from_env().with_overrides(
            base_url=args.base_url,
            idle_window_ms=args.idle_window_ms,
            wait_timeout_ms=args.wait_timeout_ms,
            headless=False if args.headed else None,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    log_level = getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info(f"Running frontend scenario against {config.base_url}")

    try:
        report = run_scenario(config, build_frontend_scenario,
                              wait_for_server=not args.no_wait_for_server)
    except HarnessError as e:
        # Failures before the first step (server down, browser launch)
        report = CheckReport()
        report.record_fatal(e)
    except PlaywrightError as e:
        report = CheckReport()
        report.record_fatal(BrowserError(f"Browser error: {e}"))

    print(report.summary())
    return report.exit_code
