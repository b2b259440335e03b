"""Run snapshot and report schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .config import GameConfig


class MarketSnapshot(BaseModel):
    """Snapshot of market state after one tick."""

    price: float = Field(..., description="Current price ($/kWh)")
    supply: float = Field(..., description="Total supply (kWh)")
    demand: float = Field(..., description="Total demand (kWh)")
    volume: float = Field(..., description="Cumulative traded volume (kWh)")
    weather: str = Field(..., description="Current weather")

    model_config = ConfigDict(frozen=True)


class PlayerSnapshot(BaseModel):
    """Snapshot of the player's books after one tick."""

    cash: float
    energy_balance: float = Field(..., description="Tradable surplus (<0 = deficit)")
    battery_level: float
    total_profit: float
    daily_profit: float
    trade_count: int

    model_config = ConfigDict(frozen=True)


class TickResult(BaseModel):
    """Snapshot of a single simulated hour."""

    step: int
    day: int
    hour: int
    market: MarketSnapshot
    player: PlayerSnapshot | None = None
    automated_trades: int = Field(0, description="Trades fired by automation rules")
    events: list[str] = Field(
        default_factory=list, description="Random event types rolled this tick"
    )

    model_config = ConfigDict(frozen=True)


class LeaderboardEntry(BaseModel):
    """One row of the leaderboard."""

    rank: int
    name: str
    participant_type: str
    profit: float
    trades: int

    model_config = ConfigDict(frozen=True)


class FinalReport(BaseModel):
    """End-of-run summary for the player."""

    total_profit: float
    total_trades: int
    final_rank: int = Field(..., description="1-based rank, 0 if not ranked")
    days_played: int

    model_config = ConfigDict(frozen=True)


class GameRun(BaseModel):
    """Encapsulation of a full game run."""

    id: str = Field(..., description="Unique run identifier (timestamp)")
    config: GameConfig
    ticks: list[TickResult] = Field(default_factory=list)
    report: FinalReport | None = None

    model_config = ConfigDict(frozen=True)
