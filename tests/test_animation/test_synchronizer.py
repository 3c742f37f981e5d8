"""Tests for the shared shimmer clock."""

from __future__ import annotations

import gc

import pytest

from shimmertrace.animation.synchronizer import ShimmerSynchronizer
from tests.conftest import FakeClock, Recorder


@pytest.fixture
def sync(clock) -> ShimmerSynchronizer:
    return ShimmerSynchronizer(1200, time_source=clock)


class TestLifecycle:
    def test_idle_until_first_subscriber(self, sync):
        assert not sync.is_running
        assert sync.progress == 0

    def test_runs_while_subscribed(self, sync):
        a, b = Recorder(), Recorder()
        sync.register(a)
        sync.register(b)
        assert sync.is_running
        sync.unregister(a)
        assert sync.is_running
        sync.unregister(b)
        assert not sync.is_running

    def test_reregister_restarts_from_zero(self, sync, clock):
        sub = Recorder()
        sync.register(sub)
        clock.advance(0.5)
        assert sync.tick() > 0
        sync.unregister(sub)
        sync.register(sub)
        assert sync.is_running
        assert sync.progress == 0

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            ShimmerSynchronizer(0)


class TestFanOut:
    def test_one_clock_for_many_subscribers(self, sync, clock):
        subs = [Recorder() for _ in range(3)]
        for sub in subs:
            sync.register(sub)
        clock.advance(0.3)
        sync.tick()
        assert [s.invalidations for s in subs] == [1, 1, 1]
        assert sync.subscriber_count == 3

    def test_double_register_is_idempotent(self, sync):
        sub = Recorder()
        sync.register(sub)
        sync.register(sub)
        assert sync.subscriber_count == 1
        sync.tick()
        assert sub.invalidations == 1

    def test_unregister_unknown_is_noop(self, sync):
        sub = Recorder()
        sync.register(sub)
        sync.unregister(Recorder())
        assert sync.is_running
        assert sync.subscriber_count == 1

    def test_unregister_during_notification(self, sync):
        class Leaver(Recorder):
            def invalidate(self) -> None:
                super().invalidate()
                sync.unregister(self)

        leaver, stayer = Leaver(), Recorder()
        sync.register(leaver)
        sync.register(stayer)
        sync.tick()
        assert leaver.invalidations == 1
        assert stayer.invalidations == 1
        assert sync.subscriber_count == 1
        sync.tick()
        assert leaver.invalidations == 1
        assert stayer.invalidations == 2

    def test_last_subscriber_leaving_during_notification_stops_clock(self, sync):
        class Leaver(Recorder):
            def invalidate(self) -> None:
                super().invalidate()
                sync.unregister(self)

        sync.register(Leaver())
        sync.tick()
        assert not sync.is_running


class TestRestart:
    def test_rewinds_running_clock(self, sync, clock):
        sync.register(Recorder())
        clock.advance(0.5)
        assert sync.tick() > 0
        sync.restart()
        assert sync.progress == 0
        assert sync.is_running

    def test_idle_clock_stays_idle(self, sync):
        sync.restart()
        assert not sync.is_running


class TestWeakReferences:
    def test_collected_subscriber_is_pruned(self, sync):
        sub = Recorder()
        sync.register(sub)
        del sub
        gc.collect()
        assert sync.subscriber_count == 0
        sync.tick()
        assert not sync.is_running

    def test_collected_subscriber_does_not_affect_others(self, sync):
        keep, drop = Recorder(), Recorder()
        sync.register(keep)
        sync.register(drop)
        del drop
        gc.collect()
        sync.tick()
        assert keep.invalidations == 1
        assert sync.is_running


class TestProgress:
    def test_shared_progress_cycles(self, clock):
        sync = ShimmerSynchronizer(1000, time_source=clock)
        sub = Recorder()
        sync.register(sub)
        seen = []
        for step in range(1, 11):
            clock.now = step / 10
            seen.append(sync.tick())
        assert all(0 <= p <= 100 for p in seen)
        assert seen[:9] == sorted(seen[:9])
        # One full period wraps back to the start
        assert seen[-1] == 0
        assert sub.invalidations == 10

    def test_tick_without_subscribers_does_nothing(self, sync, clock):
        clock.advance(0.6)
        assert sync.tick() == 0


def test_fake_clock_advances():
    clock = FakeClock(1.0)
    clock.advance(0.5)
    assert clock() == 1.5
