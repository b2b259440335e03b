"""Explicit game state owned by a single controller."""

from dataclasses import dataclass, field

from energy_trading_sim.core.automation import AutomationEngine
from energy_trading_sim.core.clock import GameClock
from energy_trading_sim.core.constants import DEMO_PARTICIPANTS
from energy_trading_sim.core.ledger import TradeLedger
from energy_trading_sim.core.market import Market
from energy_trading_sim.core.participants import DemoParticipant, Player
from energy_trading_sim.core.random_events import MarketEvent
from energy_trading_sim.schemas import GameConfig, LeaderboardEntry


def _demo_participants() -> dict[str, DemoParticipant]:
    return {d["participant_id"]: DemoParticipant(**d) for d in DEMO_PARTICIPANTS}


@dataclass
class GameState:
    """Everything one game run mutates.

    Passed by reference to the pure update functions in ``game_loop``.
    """

    config: GameConfig
    clock: GameClock
    market: Market
    ledger: TradeLedger = field(default_factory=TradeLedger)
    automation: AutomationEngine = field(default_factory=AutomationEngine)
    player: Player | None = None
    participants: dict[str, DemoParticipant] = field(
        default_factory=_demo_participants
    )
    events: list[MarketEvent] = field(default_factory=list)
    leaderboard: list[LeaderboardEntry] = field(default_factory=list)
    is_running: bool = False
    is_paused: bool = False
    is_finished: bool = False

    @classmethod
    def from_config(cls, config: GameConfig) -> "GameState":
        return cls(
            config=config,
            clock=GameClock(config.clock),
            market=Market(config.market),
        )

    @property
    def day(self) -> int:
        return self.clock.day

    @property
    def hour(self) -> int:
        return self.clock.hour

    def participant_demand(self) -> float:
        """Consumption added to grid demand by the player and demo traders."""
        demand = sum(p.current_consumption for p in self.participants.values())
        if self.player is not None and self.player.participant_type is not None:
            demand += self.player.participant_type.consumption
        return demand
