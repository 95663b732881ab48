"""Test the asyncio subscriptions.

Tests for omurice.app.subscriptions:
    - FrameClock dispatches millisecond deltas until cancelled
    - ResizeNotifier emits eagerly on start, then only on change
    - Subscriptions start once and need a running loop
    - schedule_once defers on a running loop, runs inline without one

Each test drives its own loop with asyncio.run().

Run:
    pytest tests/test_subscriptions.py -v
"""

import asyncio

import pytest

from omurice.app.subscriptions import FrameClock, ResizeNotifier, schedule_once


def test_frame_clock_emits_deltas():
    ticks = []

    async def scenario():
        clock = FrameClock(fps=200)
        clock.start(ticks.append)
        assert clock.active
        await asyncio.sleep(0.1)
        clock.cancel()
        assert not clock.active
        count = len(ticks)
        await asyncio.sleep(0.03)
        return count

    count = asyncio.run(scenario())
    assert count >= 3
    assert len(ticks) == count
    assert all(delta > 0 for delta in ticks)


def test_frame_clock_uses_injected_clock():
    times = [0.0, 0.016, 0.050, 0.051]
    ticks = []

    def fake_now():
        return times.pop(0) if len(times) > 1 else times[0]

    async def scenario():
        clock = FrameClock(fps=1000, now=fake_now)
        clock.start(ticks.append)
        while len(ticks) < 3:
            await asyncio.sleep(0.001)
        clock.cancel()

    asyncio.run(scenario())
    assert ticks[:3] == pytest.approx([16.0, 34.0, 1.0])


def test_frame_clock_rejects_bad_fps():
    with pytest.raises(ValueError):
        FrameClock(fps=0)


def test_start_requires_running_loop():
    with pytest.raises(RuntimeError):
        FrameClock().start(lambda delta: None)


def test_start_twice_rejected():
    async def scenario():
        clock = FrameClock()
        clock.start(lambda delta: None)
        try:
            with pytest.raises(RuntimeError, match="already started"):
                clock.start(lambda delta: None)
        finally:
            clock.cancel()

    asyncio.run(scenario())


def test_resize_notifier_eager_then_on_change():
    sizes = [(800, 600)]
    seen = []

    async def scenario():
        notifier = ResizeNotifier(lambda: sizes[-1], poll_ms=5)
        notifier.start(seen.append)
        # eager emission happens synchronously in start()
        assert seen == [(800, 600)]
        await asyncio.sleep(0.03)
        sizes.append((300, 300))
        await asyncio.sleep(0.03)
        notifier.cancel()

    asyncio.run(scenario())
    assert seen == [(800, 600), (300, 300)]


def test_schedule_once_defers_on_loop():
    calls = []

    async def scenario():
        handle = schedule_once(20, lambda: calls.append("settled"))
        assert handle is not None
        assert calls == []
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert calls == ["settled"]


def test_schedule_once_cancellable():
    calls = []

    async def scenario():
        handle = schedule_once(20, lambda: calls.append("settled"))
        handle.cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert calls == []


def test_schedule_once_without_loop_runs_inline():
    calls = []
    assert schedule_once(100, lambda: calls.append(1)) is None
    assert calls == [1]
