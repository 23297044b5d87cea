"""
Tests for core.scheduler: idle/active transitions, countdown, re-arming.
"""

import asyncio

import pytest

from core.scheduler import PollingScheduler


async def _forever(_seconds):
    await asyncio.Event().wait()


async def _yield(_seconds):
    await asyncio.sleep(0)


class TestStateMachine:
    def test_active_only_when_connected_and_auto_refresh(self):
        deactivations = []

        async def scenario():
            s = PollingScheduler(_noop_tick, interval=30, on_deactivate=lambda: deactivations.append(1), sleep=_forever)
            assert s.state == "idle"
            s.set_connected(True)
            assert s.state == "active"
            s.set_auto_refresh(False)
            assert s.state == "idle"
            s.set_auto_refresh(True)
            assert s.state == "active"
            s.set_connected(False)
            assert s.state == "idle"
            await s.aclose()

        asyncio.run(scenario())
        assert len(deactivations) == 2

    def test_auto_refresh_off_never_arms(self):
        async def scenario():
            s = PollingScheduler(_noop_tick, auto_refresh=False, sleep=_forever)
            s.set_connected(True)
            return s.state

        assert asyncio.run(scenario()) == "idle"

    def test_rejects_unknown_interval(self):
        with pytest.raises(ValueError):
            PollingScheduler(_noop_tick, interval=45)
        s = PollingScheduler(_noop_tick, interval=30)
        with pytest.raises(ValueError):
            s.set_interval(10)


class TestCountdown:
    def test_counts_down_and_wraps(self):
        s = PollingScheduler(_noop_tick, interval=15)
        assert s.countdown == 15
        seen = [s.tick_countdown() for _ in range(15)]
        assert seen[:3] == [14, 13, 12]
        assert seen[-2:] == [1, 15]

    def test_interval_change_rearms_both_tasks(self):
        async def scenario():
            s = PollingScheduler(_noop_tick, interval=30, sleep=_forever)
            s.set_connected(True)
            s.tick_countdown()
            old = (s._fetch_task, s._countdown_task)

            s.set_interval(60)
            new = (s._fetch_task, s._countdown_task)
            for _ in range(3):
                await asyncio.sleep(0)

            result = (s.countdown, s.state, old[0].cancelled(), old[1].cancelled(), new[0] is not old[0])
            await s.aclose()
            return result

        countdown, state, fetch_cancelled, countdown_cancelled, replaced = asyncio.run(scenario())
        assert countdown == 60
        assert state == "active"
        assert fetch_cancelled and countdown_cancelled
        assert replaced

    def test_interval_change_while_idle_only_resets_countdown(self):
        s = PollingScheduler(_noop_tick, interval=30)
        s.set_interval(120)
        assert s.interval == 120
        assert s.countdown == 120
        assert s.state == "idle"


class TestFetchLoop:
    def test_ticks_run_and_failures_do_not_stop_the_loop(self):
        calls = []

        async def flaky_tick():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")

        async def scenario():
            s = PollingScheduler(flaky_tick, interval=15, sleep=_yield)
            s.set_connected(True)
            for _ in range(20):
                await asyncio.sleep(0)
            await s.aclose()
            return s.state

        assert asyncio.run(scenario()) == "idle"
        assert len(calls) >= 2


async def _noop_tick():
    return None
