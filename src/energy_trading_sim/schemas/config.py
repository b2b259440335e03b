"""Configuration schemas for the simulation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from energy_trading_sim.schemas.defaults import (
    DEFAULT_BASE_DEMAND,
    DEFAULT_BASE_PRICE,
    DEFAULT_CONFIRM_LATENCY_MAX_MS,
    DEFAULT_CONFIRM_LATENCY_MIN_MS,
    DEFAULT_DEMAND_FLOOR,
    DEFAULT_EVENT_RETENTION_DAYS,
    DEFAULT_GRID_BASELINE,
    DEFAULT_HISTORY_LENGTH,
    DEFAULT_INITIAL_DEMAND,
    DEFAULT_INITIAL_SUPPLY,
    DEFAULT_INITIAL_VOLUME,
    DEFAULT_INITIAL_WEATHER,
    DEFAULT_JITTER_DEMAND,
    DEFAULT_JITTER_INTERVAL_MS,
    DEFAULT_JITTER_PRICE,
    DEFAULT_JITTER_SUPPLY,
    DEFAULT_MAX_DAYS,
    DEFAULT_NETWORK_ENABLED,
    DEFAULT_OFF_PEAK_DEMAND_FACTOR,
    DEFAULT_OFF_PEAK_MULTIPLIER,
    DEFAULT_PARTICIPANT_TYPE,
    DEFAULT_PEAK_DEMAND_FACTOR,
    DEFAULT_PEAK_MULTIPLIER,
    DEFAULT_PLAYER_NAME,
    DEFAULT_PRESENCE_INTERVAL_MS,
    DEFAULT_PRESENCE_TOGGLE_PROB,
    DEFAULT_PRICE_CEILING,
    DEFAULT_PRICE_FLOOR,
    DEFAULT_PRICE_NOISE,
    DEFAULT_RANDOM_EVENT_PROB,
    DEFAULT_SOLAR_CAPACITY,
    DEFAULT_START_DAY,
    DEFAULT_START_HOUR,
    DEFAULT_SUPPLY_FLOOR,
    DEFAULT_TICK_INTERVAL_MS,
    DEFAULT_TRADE_AMOUNT_MAX,
    DEFAULT_TRADE_AMOUNT_MIN,
    DEFAULT_TRADE_AUTOMATED_PROB,
    DEFAULT_TRADE_INTERVAL_MS,
    DEFAULT_TRADE_PRICE_SPREAD,
    DEFAULT_TRADE_PROB,
    DEFAULT_WEATHER_CHANGE_PROB,
    DEFAULT_WIND_CAPACITY,
)

Weather = Literal["sunny", "cloudy", "windy", "rainy"]


class MarketConfig(BaseModel):
    """Configuration for the market pricing formula.

    Price model (one evaluation per tick):
        price = base_price × time_multiplier × (2 − supply / demand) × noise
        noise ~ U[1 − price_noise, 1 + price_noise]
        price is clamped to [price_floor, price_ceiling]
    """

    base_price: float = Field(
        DEFAULT_BASE_PRICE, gt=0, description="Base price before scaling ($/kWh)"
    )
    price_floor: float = Field(
        DEFAULT_PRICE_FLOOR, ge=0, description="Lowest allowed price ($/kWh)"
    )
    price_ceiling: float = Field(
        DEFAULT_PRICE_CEILING, gt=0, description="Highest allowed price ($/kWh)"
    )
    peak_multiplier: float = Field(
        DEFAULT_PEAK_MULTIPLIER, gt=0, description="Price multiplier in peak hours"
    )
    off_peak_multiplier: float = Field(
        DEFAULT_OFF_PEAK_MULTIPLIER,
        gt=0,
        description="Price multiplier in off-peak hours",
    )
    price_noise: float = Field(
        DEFAULT_PRICE_NOISE,
        ge=0,
        lt=1,
        description="Half-width of the uniform noise factor around 1.0",
    )
    history_length: int = Field(
        DEFAULT_HISTORY_LENGTH, gt=0, description="Rolling price history size"
    )
    solar_capacity: float = Field(
        DEFAULT_SOLAR_CAPACITY, ge=0, description="Solar term of renewable supply"
    )
    wind_capacity: float = Field(
        DEFAULT_WIND_CAPACITY, ge=0, description="Wind term of renewable supply"
    )
    grid_baseline: float = Field(
        DEFAULT_GRID_BASELINE, ge=0, description="Fixed non-renewable grid supply"
    )
    base_demand: float = Field(
        DEFAULT_BASE_DEMAND, gt=0, description="Grid demand before time scaling"
    )
    peak_demand_factor: float = Field(DEFAULT_PEAK_DEMAND_FACTOR, gt=0)
    off_peak_demand_factor: float = Field(DEFAULT_OFF_PEAK_DEMAND_FACTOR, gt=0)
    weather_change_prob: float = Field(
        DEFAULT_WEATHER_CHANGE_PROB,
        ge=0,
        le=1,
        description="Per-tick probability of a weather transition",
    )
    initial_weather: Weather = DEFAULT_INITIAL_WEATHER
    initial_supply: float = Field(DEFAULT_INITIAL_SUPPLY, ge=0)
    initial_demand: float = Field(DEFAULT_INITIAL_DEMAND, ge=0)
    initial_volume: float = Field(DEFAULT_INITIAL_VOLUME, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_price_band(self) -> "MarketConfig":
        if self.price_floor > self.price_ceiling:
            raise ValueError("price_floor must not exceed price_ceiling")
        return self


class ClockConfig(BaseModel):
    """Configuration for simulated time."""

    start_day: int = Field(DEFAULT_START_DAY, ge=1)
    start_hour: int = Field(DEFAULT_START_HOUR, ge=0, le=23)
    max_days: int = Field(
        DEFAULT_MAX_DAYS, gt=0, description="Run ends once day exceeds this value"
    )
    tick_interval_ms: int = Field(
        DEFAULT_TICK_INTERVAL_MS,
        gt=0,
        description="Simulated milliseconds per game hour",
    )

    model_config = ConfigDict(frozen=True)


class EventConfig(BaseModel):
    """Configuration for random market events."""

    random_event_prob: float = Field(DEFAULT_RANDOM_EVENT_PROB, ge=0, le=1)
    retention_days: int = Field(
        DEFAULT_EVENT_RETENTION_DAYS,
        ge=0,
        description="Events older than (day − retention_days) are pruned at rollover",
    )

    model_config = ConfigDict(frozen=True)


class NetworkConfig(BaseModel):
    """Configuration for the simulated multiplayer network.

    All activity is randomized; there is no wire protocol behind it.
    """

    enabled: bool = DEFAULT_NETWORK_ENABLED
    presence_interval_ms: int = Field(DEFAULT_PRESENCE_INTERVAL_MS, gt=0)
    presence_toggle_prob: float = Field(DEFAULT_PRESENCE_TOGGLE_PROB, ge=0, le=1)
    trade_interval_ms: int = Field(DEFAULT_TRADE_INTERVAL_MS, gt=0)
    trade_prob: float = Field(DEFAULT_TRADE_PROB, ge=0, le=1)
    trade_amount_min: int = Field(DEFAULT_TRADE_AMOUNT_MIN, gt=0)
    trade_amount_max: int = Field(DEFAULT_TRADE_AMOUNT_MAX, gt=0)
    trade_price_spread: float = Field(DEFAULT_TRADE_PRICE_SPREAD, ge=0, lt=1)
    trade_automated_prob: float = Field(DEFAULT_TRADE_AUTOMATED_PROB, ge=0, le=1)
    jitter_interval_ms: int = Field(DEFAULT_JITTER_INTERVAL_MS, gt=0)
    jitter_price: float = Field(DEFAULT_JITTER_PRICE, ge=0)
    jitter_supply: int = Field(DEFAULT_JITTER_SUPPLY, ge=0)
    jitter_demand: int = Field(DEFAULT_JITTER_DEMAND, ge=0)
    supply_floor: float = Field(DEFAULT_SUPPLY_FLOOR, ge=0)
    demand_floor: float = Field(DEFAULT_DEMAND_FLOOR, ge=0)
    confirm_latency_min_ms: int = Field(DEFAULT_CONFIRM_LATENCY_MIN_MS, ge=0)
    confirm_latency_max_ms: int = Field(DEFAULT_CONFIRM_LATENCY_MAX_MS, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_ranges(self) -> "NetworkConfig":
        if self.trade_amount_min > self.trade_amount_max:
            raise ValueError("trade_amount_min must not exceed trade_amount_max")
        if self.confirm_latency_min_ms > self.confirm_latency_max_ms:
            raise ValueError(
                "confirm_latency_min_ms must not exceed confirm_latency_max_ms"
            )
        return self


class AutomationRuleConfig(BaseModel):
    """A standing automation rule installed when a scenario starts."""

    kind: Literal["auto_buy", "auto_sell"]
    price_threshold: float = Field(..., ge=0)
    enabled: bool = True

    model_config = ConfigDict(frozen=True)


class GameConfig(BaseModel):
    """Root configuration for a game run."""

    name: str = "Scenario"
    description: str = ""
    player_name: str = DEFAULT_PLAYER_NAME
    participant_type: str = DEFAULT_PARTICIPANT_TYPE

    # Sub-configs
    market: MarketConfig = Field(default_factory=MarketConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    events: EventConfig = Field(default_factory=EventConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    automation: list[AutomationRuleConfig] = Field(default_factory=list)

    seed: int | None = None

    model_config = ConfigDict(frozen=True)
