"""
test_frame_clock.py: animation scheduling and fps accounting.

Run:
    pytest tests/test_frame_clock.py -v
"""
import logging

import pytest

from airtraffic.render.frame_clock import FrameClock
from airtraffic.render.scheduler import INFINITE, IntervalPolicy


@pytest.fixture()
def redraws():
    return []


@pytest.fixture()
def frame_clock(scheduler, clock, redraws):
    return FrameClock(scheduler, lambda: redraws.append(1), clock=clock)


# ── Scheduling ───────────────────────────────────────────────────────────────

class TestScheduling:

    def test_default_policy_loops_forever_every_three_seconds(self, frame_clock):
        assert frame_clock.policy.duration_ms == 3000
        assert frame_clock.policy.repeat_count == INFINITE
        assert frame_clock.policy.repeats_forever

    def test_start_hands_policy_to_scheduler(self, frame_clock, scheduler):
        frame_clock.start()
        assert scheduler.is_active
        assert scheduler.policy == frame_clock.policy
        assert frame_clock.is_running

    def test_restart_cancels_previous_run(self, frame_clock, scheduler):
        frame_clock.start()
        frame_clock.start()
        assert scheduler.starts == 2
        assert scheduler.double_starts == 0
        assert scheduler.cancels >= 2

    def test_tick_requests_redraw(self, frame_clock, scheduler, redraws):
        frame_clock.start()
        scheduler.tick(0.25)
        scheduler.tick(0.5)
        assert len(redraws) == 2

    def test_pause_detaches_and_resume_reattaches(self, scheduler, redraws):
        policy = IntervalPolicy(duration_ms=1200, frame_interval_ms=20)
        frame_clock = FrameClock(scheduler, lambda: redraws.append(1), policy=policy)
        frame_clock.start()
        frame_clock.pause()
        assert not scheduler.is_active
        scheduler.tick()
        assert redraws == []

        frame_clock.resume()
        assert scheduler.is_active
        assert scheduler.policy == policy
        scheduler.tick()
        assert len(redraws) == 1

    def test_resume_while_running_is_noop(self, frame_clock, scheduler):
        frame_clock.start()
        frame_clock.resume()
        assert scheduler.starts == 1
        assert scheduler.double_starts == 0

    def test_resume_restarts_scheduler_that_finished_on_its_own(self, frame_clock, scheduler):
        frame_clock.start()
        scheduler.finish()
        assert not frame_clock.is_running

        frame_clock.resume()
        assert scheduler.is_active
        assert scheduler.starts == 2
        assert frame_clock.is_running


# ── fps ──────────────────────────────────────────────────────────────────────

class TestFps:

    def test_thirty_frames_over_one_second(self, frame_clock, clock):
        frame_clock.reset_fps()
        start = clock.now
        for i in range(1, 31):
            clock.now = start + round(i * 1001 / 30)
            frame_clock.record_frame()
        assert frame_clock.fps == pytest.approx(30.0, rel=0.01)
        assert frame_clock.frame_count == 0

    def test_no_fps_before_window_elapses(self, frame_clock, clock):
        frame_clock.reset_fps()
        for _ in range(10):
            clock.advance(50)
            frame_clock.record_frame()
        assert frame_clock.fps == 0.0
        assert frame_clock.frame_count == 10

    def test_window_needs_more_than_one_second(self, frame_clock, clock):
        frame_clock.reset_fps()
        clock.advance(1000)
        frame_clock.record_frame()
        assert frame_clock.fps == 0.0
        assert frame_clock.frame_count == 1

        clock.advance(1)
        frame_clock.record_frame()
        assert frame_clock.fps == pytest.approx(2 / 1.001)
        assert frame_clock.frame_count == 0

    def test_negative_window_skips_sample(self, frame_clock, clock):
        frame_clock.reset_fps()
        for _ in range(5):
            clock.advance(100)
            frame_clock.record_frame()
        fps_before = frame_clock.fps
        count_before = frame_clock.frame_count

        clock.advance(-5000)
        frame_clock.record_frame()

        assert frame_clock.fps == fps_before
        assert frame_clock.frame_count == count_before
        assert frame_clock.start_ms == clock.now

    def test_listeners_receive_fps(self, frame_clock, clock):
        seen = []
        frame_clock.add_fps_listener(seen.append)
        frame_clock.reset_fps()
        clock.advance(2000)
        frame_clock.record_frame()
        assert seen == [pytest.approx(0.5)]

    def test_fps_logged_at_debug(self, frame_clock, clock, caplog):
        frame_clock.reset_fps()
        clock.advance(1500)
        with caplog.at_level(logging.DEBUG, logger="airtraffic.render.frame_clock"):
            frame_clock.record_frame()
        assert "fps =" in caplog.text

    def test_start_resets_window(self, frame_clock, clock):
        clock.advance(100)
        frame_clock.record_frame()
        clock.advance(100)
        frame_clock.start()
        assert frame_clock.frame_count == 0
        assert frame_clock.start_ms == clock.now
