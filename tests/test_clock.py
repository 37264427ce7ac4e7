from __future__ import annotations

import asyncio

import pytest

from liftsim import AsyncioClock, ManualClock


def test_one_shot_fires_when_due():
    clock = ManualClock()
    fired = []
    clock.schedule(300, lambda: fired.append(clock.now()))
    clock.advance(299)
    assert fired == []
    clock.advance(1)
    assert fired == [300]
    assert clock.pending == 0


def test_timers_due_together_fire_in_schedule_order():
    clock = ManualClock()
    fired = []
    clock.schedule(100, lambda: fired.append("a"))
    clock.schedule(100, lambda: fired.append("b"))
    clock.schedule(50, lambda: fired.append("c"))
    clock.advance(100)
    assert fired == ["c", "a", "b"]


def test_periodic_repeats_until_deadline():
    clock = ManualClock()
    ticks = []
    clock.schedule_periodic(500, lambda: ticks.append(clock.now()))
    clock.advance(2000)
    assert ticks == [500, 1000, 1500, 2000]
    assert clock.now() == 2000


def test_timer_scheduled_from_callback_fires_in_same_advance():
    clock = ManualClock()
    fired = []
    clock.schedule(100, lambda: clock.schedule(100, lambda: fired.append(clock.now())))
    clock.advance(250)
    assert fired == [200]


def test_advance_rejects_negative_time():
    with pytest.raises(ValueError):
        ManualClock().advance(-1)


def test_asyncio_clock_runs_callbacks_until_closed():
    async def scenario():
        clock = AsyncioClock()
        fired = []
        clock.schedule(10, lambda: fired.append("once"))
        clock.schedule_periodic(5, lambda: fired.append("tick"))
        await asyncio.sleep(0.1)
        clock.close()
        count = len(fired)
        await asyncio.sleep(0.03)
        return fired, count

    fired, count = asyncio.run(scenario())
    assert "once" in fired
    assert fired.count("tick") >= 2
    assert len(fired) == count
