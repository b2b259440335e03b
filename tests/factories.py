"""Test data factories for generating valid schema and domain objects."""

from typing import Any

from energy_trading_sim.core.participants import CATALOG, Player
from energy_trading_sim.schemas import (
    ClockConfig,
    EventConfig,
    GameConfig,
    MarketConfig,
    MarketSnapshot,
    PlayerSnapshot,
    TickResult,
)


def create_game_config(name: str = "Test Scenario", **kwargs: Any) -> GameConfig:
    """Create a valid GameConfig with a fixed seed and no random events."""
    defaults = {
        "seed": 42,
        "market": MarketConfig(),
        "clock": ClockConfig(),
        "events": EventConfig(random_event_prob=0.0),
    }
    data = {**defaults, **kwargs}
    return GameConfig(name=name, **data)


def create_player(
    participant_type: str | None = "residential",
    player_id: str = "player-1",
    name: str = "Tester",
    **kwargs: Any,
) -> Player:
    """Create a Player, optionally with an archetype and book overrides."""
    player = Player(player_id, name)
    if participant_type is not None:
        player.assign_type(CATALOG.get(participant_type))
    for attr, value in kwargs.items():
        setattr(player, attr, value)
    return player


def create_tick_result(step: int = 1, price: float = 0.12, **kwargs: Any) -> TickResult:
    """Create a valid TickResult with a residential-looking player snapshot."""
    defaults = {
        "day": 1,
        "hour": 7,
        "market": MarketSnapshot(
            price=price, supply=1200.0, demand=1100.0, volume=340.0, weather="sunny"
        ),
        "player": PlayerSnapshot(
            cash=500.0,
            energy_balance=0.0,
            battery_level=7.5,
            total_profit=0.0,
            daily_profit=0.0,
            trade_count=0,
        ),
    }
    data = {**defaults, **kwargs}
    return TickResult(step=step, **data)
