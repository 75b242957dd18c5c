"""Pass/fail facts collected during a scenario run"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .exceptions import HarnessError

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    name: str
    passed: bool
    expected: Any = None
    actual: Any = None


@dataclass
class CheckReport:
    """Every check recorded so far plus the fatal error, if one occurred"""

    checks: List[CheckResult] = field(default_factory=list)
    fatal: Optional[HarnessError] = None

    def record(self, name: str, passed: bool, expected: Any = None, actual: Any = None) -> bool:
        result = CheckResult(name=name, passed=passed, expected=expected, actual=actual)
        self.checks.append(result)
        if passed:
            logger.info(f"PASS {name}")
        else:
            logger.error(f"FAIL {name}: expected {expected!r}, got {actual!r}")
        return passed

    def record_fatal(self, error: HarnessError):
        self.fatal = error
        logger.error(f"FATAL {type(error).__name__}: {error}")

    @property
    def failures(self) -> List[CheckResult]:
        return [check for check in self.checks if not check.passed]

    @property
    def passed_count(self) -> int:
        return len(self.checks) - len(self.failures)

    @property
    def passed(self) -> bool:
        return self.fatal is None and not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def summary(self) -> str:
        lines = [
            "=" * 50,
            f"{self.passed_count} passed, {len(self.failures)} failed",
        ]
        for check in self.failures:
            lines.append(f"❌ {check.name}")
            lines.append(f"   expected: {check.expected!r}")
            lines.append(f"   actual:   {check.actual!r}")
        if self.fatal is not None:
            lines.append(f"💥 Harness error ({type(self.fatal).__name__}): {self.fatal}")
        if self.passed:
            lines.append("✅ All checks passed")
        lines.append("=" * 50)
        return "\n".join(lines)
