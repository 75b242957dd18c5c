"""Quiescence tracking for send / get_updates activity"""

import logging
import re
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class QuiescenceTracker:
    """Timestamp of the most recent send or get_updates response

    One tracker is owned by each harness run and passed explicitly to the
    sender and to the response subscription. The clock is injectable so the
    idle predicate can be tested without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._last_activity: Optional[float] = None
        self.activity_count = 0

    @property
    def last_activity(self) -> Optional[float]:
        return self._last_activity

    def mark_activity(self, source: str = "send"):
        """Record activity happening now"""
        now = self._clock()
        # Never move backwards, even if the clock does
        if self._last_activity is None or now > self._last_activity:
            self._last_activity = now
        self.activity_count += 1
        logger.debug(f"Activity ({source}) at {self._last_activity:.3f}")

    def idle_ms(self) -> Optional[float]:
        """Milliseconds since the last activity, None if there was none"""
        if self._last_activity is None:
            return None
        return (self._clock() - self._last_activity) * 1000

    def is_quiescent(self, idle_window_ms: int) -> bool:
        """True once more than idle_window_ms passed since the last activity"""
        idle = self.idle_ms()
        return idle is None or idle > idle_window_ms

    def observer(self, pattern: str) -> Callable[[str], None]:
        """Build a response callback that marks activity for matching URLs"""
        compiled = re.compile(pattern)

        def on_response(url: str):
            if compiled.search(url):
                self.mark_activity(source="update")

        return on_response
