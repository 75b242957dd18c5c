"""Ordered scenario steps with bounded waits

A scenario is a flat list of steps. Each step may declare a wait condition
that is resolved before its action runs; the next step starts only once the
action has returned. Waits are always bounded, and a timeout aborts the run.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from playwright.sync_api import Error as PlaywrightError

from .exceptions import BrowserError, HarnessError
from .quiescence import QuiescenceTracker
from .report import CheckReport

logger = logging.getLogger(__name__)


class StepKind(enum.Enum):
    ACTION = "action"
    WAIT_FOR_ELEMENT = "wait for element"
    WAIT_FOR_PREDICATE = "wait for predicate"
    ASSERTION = "assertion"


@dataclass
class WaitForElement:
    selector: str
    state: str = "visible"

    def resolve(self, browser, timeout_ms: Optional[int]):
        browser.wait_for_selector(self.selector, state=self.state, timeout=timeout_ms)


@dataclass
class WaitForPredicate:
    predicate: Callable[[], bool]
    description: str

    def resolve(self, browser, timeout_ms: Optional[int]):
        browser.wait_until(self.predicate, self.description, timeout=timeout_ms)


@dataclass
class Step:
    name: str
    kind: StepKind
    action: Optional[Callable[[], None]] = None
    wait: Optional[object] = None
    timeout_ms: Optional[int] = None


class Scenario:
    """Builder and runner for an ordered list of steps"""

    def __init__(self, browser, report: Optional[CheckReport] = None,
                 wait_timeout_ms: Optional[int] = None):
        self.browser = browser
        self.report = report if report is not None else CheckReport()
        self.wait_timeout_ms = wait_timeout_ms
        self.steps: List[Step] = []
        self.completed = 0

    def _add(self, step: Step) -> "Scenario":
        self.steps.append(step)
        return self

    def then(self, action: Callable[[], None], name: Optional[str] = None) -> "Scenario":
        """Run an action as soon as the previous step is done"""
        return self._add(Step(name or _name_of(action), StepKind.ACTION, action=action))

    def check(self, action: Callable[[], None], name: Optional[str] = None) -> "Scenario":
        """Run a block of checks against the current page"""
        return self._add(Step(name or _name_of(action), StepKind.ASSERTION, action=action))

    def wait_for_selector(self, selector: str, action: Optional[Callable[[], None]] = None,
                          state: str = "visible", name: Optional[str] = None,
                          timeout_ms: Optional[int] = None) -> "Scenario":
        """Wait for an element, then run the optional action"""
        return self._add(Step(
            name or f"wait for {selector}",
            StepKind.WAIT_FOR_ELEMENT,
            action=action,
            wait=WaitForElement(selector, state),
            timeout_ms=timeout_ms,
        ))

    def wait_for(self, predicate: Callable[[], bool], description: str,
                 action: Optional[Callable[[], None]] = None,
                 timeout_ms: Optional[int] = None) -> "Scenario":
        """Wait for a Python-side predicate, then run the optional action"""
        return self._add(Step(
            f"wait for {description}",
            StepKind.WAIT_FOR_PREDICATE,
            action=action,
            wait=WaitForPredicate(predicate, description),
            timeout_ms=timeout_ms,
        ))

    def wait_for_quiescence(self, tracker: QuiescenceTracker, idle_window_ms: int,
                            action: Optional[Callable[[], None]] = None,
                            timeout_ms: Optional[int] = None) -> "Scenario":
        """Wait until no send or update happened for idle_window_ms"""
        return self.wait_for(
            lambda: tracker.is_quiescent(idle_window_ms),
            f"{idle_window_ms}ms without send or update activity",
            action=action,
            timeout_ms=timeout_ms,
        )

    def run(self) -> CheckReport:
        """Execute every step in order, stopping at the first harness error"""
        total = len(self.steps)
        for index, step in enumerate(self.steps, start=1):
            logger.debug(f"Step {index}/{total} ({step.kind.value}): {step.name}")
            try:
                if step.wait is not None:
                    step.wait.resolve(self.browser, step.timeout_ms or self.wait_timeout_ms)
                if step.action is not None:
                    step.action()
            except HarnessError as e:
                logger.error(f"Step {index}/{total} '{step.name}' aborted the scenario")
                self.report.record_fatal(e)
                break
            except PlaywrightError as e:
                # Raised outside the adapter, e.g. by a crashed page
                logger.error(f"Step {index}/{total} '{step.name}' aborted the scenario")
                self.report.record_fatal(BrowserError(f"Browser error: {e}"))
                break
            self.completed = index
        return self.report


def _name_of(action: Callable) -> str:
    return getattr(action, "__name__", repr(action))
