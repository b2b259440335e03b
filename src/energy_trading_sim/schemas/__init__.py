"""Schemas package.

- config.py: Configuration models (GameConfig, MarketConfig, etc.)
- data.py: Run data models (GameRun, TickResult, FinalReport, etc.)
"""

from .config import (
    AutomationRuleConfig,
    ClockConfig,
    EventConfig,
    GameConfig,
    MarketConfig,
    NetworkConfig,
)
from .data import (
    FinalReport,
    GameRun,
    LeaderboardEntry,
    MarketSnapshot,
    PlayerSnapshot,
    TickResult,
)

__all__ = [
    "AutomationRuleConfig",
    "ClockConfig",
    "EventConfig",
    "GameConfig",
    "MarketConfig",
    "NetworkConfig",
    "FinalReport",
    "GameRun",
    "LeaderboardEntry",
    "MarketSnapshot",
    "PlayerSnapshot",
    "TickResult",
]
