"""Tests for random market events."""

import random

from energy_trading_sim.core.constants import RANDOM_EVENT_TEMPLATES
from energy_trading_sim.core.random_events import (
    MarketEvent,
    prune_events,
    roll_random_event,
)


def test_zero_probability_never_fires() -> None:
    rng = random.Random(0)
    assert all(roll_random_event(rng, 0.0, 1, h) is None for h in range(100))


def test_certain_event_uses_a_template() -> None:
    event = roll_random_event(random.Random(5), 1.0, day=3, hour=14)
    assert event is not None
    assert (event.day, event.hour) == (3, 14)
    assert event.event_type in {t["event_type"] for t in RANDOM_EVENT_TEMPLATES}


def test_prune_keeps_today_and_yesterday() -> None:
    events = [
        MarketEvent("grid_congestion", "Grid Congestion", "", day=d, hour=12)
        for d in (1, 2, 3)
    ]
    kept = prune_events(events, current_day=3)
    assert [e.day for e in kept] == [2, 3]

    assert prune_events(events, current_day=3, retention_days=0)[0].day == 3
