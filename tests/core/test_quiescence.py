"""Quiescence tracker: idle predicate, monotonicity and response observation"""

from harness.quiescence import QuiescenceTracker

from fakes import FakeClock


class TestQuiescenceTracker:

    def test_quiescent_before_any_activity(self):
        tracker = QuiescenceTracker(clock=FakeClock())
        assert tracker.last_activity is None
        assert tracker.is_quiescent(300)

    def test_not_quiescent_within_idle_window(self):
        clock = FakeClock()
        tracker = QuiescenceTracker(clock=clock)
        tracker.mark_activity()

        assert not tracker.is_quiescent(300)
        clock.advance(0.2)
        assert not tracker.is_quiescent(300)

    def test_quiescent_once_window_elapses(self):
        clock = FakeClock()
        tracker = QuiescenceTracker(clock=clock)
        tracker.mark_activity()
        clock.advance(0.301)
        assert tracker.is_quiescent(300)

    def test_new_activity_restarts_window(self):
        clock = FakeClock()
        tracker = QuiescenceTracker(clock=clock)
        tracker.mark_activity()
        clock.advance(0.25)
        tracker.mark_activity(source="update")
        clock.advance(0.25)

        assert not tracker.is_quiescent(300)
        assert tracker.activity_count == 2

    def test_timestamp_never_decreases(self):
        clock = FakeClock(start=50.0)
        tracker = QuiescenceTracker(clock=clock)
        tracker.mark_activity()
        clock.advance(-10)
        tracker.mark_activity()
        assert tracker.last_activity == 50.0

    def test_observer_marks_only_matching_urls(self):
        clock = FakeClock()
        tracker = QuiescenceTracker(clock=clock)
        observe = tracker.observer(r"/json/get_updates")

        observe("http://localhost:9981/static/app.js")
        assert tracker.last_activity is None

        observe("http://localhost:9981/json/get_updates?pointer=12")
        assert tracker.last_activity == clock.now
        assert tracker.activity_count == 1

    def test_idle_ms(self):
        clock = FakeClock()
        tracker = QuiescenceTracker(clock=clock)
        assert tracker.idle_ms() is None
        tracker.mark_activity()
        clock.advance(0.5)
        assert round(tracker.idle_ms()) == 500
