"""Random market events.

Each tick rolls once against ``random_event_prob``; on success one template
from RANDOM_EVENT_TEMPLATES is drawn uniformly and stamped with the current
day and hour.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime

from energy_trading_sim.core.constants import RANDOM_EVENT_TEMPLATES


@dataclass(frozen=True)
class MarketEvent:
    event_type: str
    title: str
    message: str
    day: int
    hour: int
    effect: dict = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


def roll_random_event(
    rng: random.Random, probability: float, day: int, hour: int
) -> MarketEvent | None:
    """Return a new event with the given probability, else None."""
    if rng.random() >= probability:
        return None
    template = rng.choice(RANDOM_EVENT_TEMPLATES)
    return MarketEvent(
        event_type=template["event_type"],
        title=template["title"],
        message=template["message"],
        effect=dict(template["effect"]),
        day=day,
        hour=hour,
    )


def prune_events(
    events: list[MarketEvent], current_day: int, retention_days: int = 1
) -> list[MarketEvent]:
    """Drop events older than ``current_day - retention_days``."""
    cutoff = current_day - retention_days
    return [event for event in events if event.day >= cutoff]
