"""Market logic for peer-to-peer energy trading.

Implements the hourly price formula:

    multiplier = peak_multiplier     if hour in PEAK_HOURS
                 off_peak_multiplier if hour in OFF_PEAK_HOURS
                 1.0                 otherwise
    supply = solar_capacity × solar(weather) + wind_capacity × wind(weather)
             + grid_baseline
    demand = base_demand × demand_factor(hour) + participant_demand
    price  = base_price × multiplier × (2 − supply / demand) × U[0.9, 1.1]
    price  = clamp(price, price_floor, price_ceiling)

A scarce market (supply < demand) pushes price above base, a surplus pushes
it below. Weather drifts with a small per-tick probability.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass

from energy_trading_sim.core.constants import (
    OFF_PEAK_HOURS,
    PEAK_HOURS,
    WEATHER_EFFECTS,
    WEATHER_TYPES,
)
from energy_trading_sim.schemas import MarketConfig, MarketSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricePoint:
    """One entry of the rolling price history."""

    day: int
    hour: int
    price: float
    supply: float
    demand: float

    @property
    def label(self) -> str:
        return f"Day {self.day}, {self.hour}:00"


class Market:
    """The energy market order book summary.

    Attributes:
        config: Pricing configuration.
        current_price: Most recent price ($/kWh).
        supply: Most recent total supply (kWh).
        demand: Most recent total demand (kWh).
        volume: Cumulative traded volume (kWh).
        weather: Current weather key (see WEATHER_EFFECTS).
        price_history: Rolling window of the last ``history_length`` prices.
    """

    def __init__(self, config: MarketConfig | None = None) -> None:
        self.config = config or MarketConfig()
        self.current_price: float = self.config.base_price
        self.supply: float = self.config.initial_supply
        self.demand: float = self.config.initial_demand
        self.volume: float = self.config.initial_volume
        self.weather: str = self.config.initial_weather
        self.price_history: deque[PricePoint] = deque(
            maxlen=self.config.history_length
        )

    # ------------------------------------------------------------------
    # Pricing components
    # ------------------------------------------------------------------

    def time_multiplier(self, hour: int) -> float:
        if hour in PEAK_HOURS:
            return self.config.peak_multiplier
        if hour in OFF_PEAK_HOURS:
            return self.config.off_peak_multiplier
        return 1.0

    def compute_supply(self, weather: str) -> float:
        """Renewable supply for ``weather`` plus the fixed grid baseline."""
        effect = WEATHER_EFFECTS[weather]
        renewable = (
            self.config.solar_capacity * effect["solar"]
            + self.config.wind_capacity * effect["wind"]
        )
        return renewable + self.config.grid_baseline

    def compute_demand(self, hour: int, participant_demand: float = 0.0) -> float:
        base = self.config.base_demand
        if hour in PEAK_HOURS:
            base *= self.config.peak_demand_factor
        elif hour in OFF_PEAK_HOURS:
            base *= self.config.off_peak_demand_factor
        return base + participant_demand

    def clamp(self, price: float) -> float:
        return max(self.config.price_floor, min(self.config.price_ceiling, price))

    def compute_price(
        self, hour: int, supply: float, demand: float, noise: float = 1.0
    ) -> float:
        """Evaluate the price formula for given inputs.

        Args:
            hour: Hour of day (0-23).
            supply: Total supply (kWh).
            demand: Total demand (kWh), must be positive.
            noise: Multiplicative noise factor drawn by the caller.

        Returns:
            Clamped price.
        """
        price = self.config.base_price * self.time_multiplier(hour)
        price *= 2 - supply / demand
        price *= noise
        return self.clamp(price)

    # ------------------------------------------------------------------
    # Per-tick update
    # ------------------------------------------------------------------

    def update(
        self,
        hour: int,
        day: int,
        participant_demand: float,
        rng: random.Random,
    ) -> str | None:
        """Recompute price, supply and demand for a new hour.

        Appends the result to the price history (oldest evicted past
        ``history_length``) and then rolls for a weather transition.

        Returns:
            The new weather if it changed this tick, else None.
        """
        supply = self.compute_supply(self.weather)
        demand = self.compute_demand(hour, participant_demand)
        spread = self.config.price_noise
        noise = (1 - spread) + rng.random() * 2 * spread

        self.current_price = self.compute_price(hour, supply, demand, noise)
        self.supply = round(supply)
        self.demand = round(demand)

        self.price_history.append(
            PricePoint(
                day=day,
                hour=hour,
                price=self.current_price,
                supply=self.supply,
                demand=self.demand,
            )
        )
        logger.debug(
            f"Day {day} {hour}:00 price=${self.current_price:.3f} "
            f"supply={self.supply} demand={self.demand} weather={self.weather}"
        )

        if rng.random() < self.config.weather_change_prob:
            return self.change_weather(rng)
        return None

    def change_weather(self, rng: random.Random) -> str | None:
        """Draw a weather uniformly; returns it only if it differs."""
        new_weather = rng.choice(WEATHER_TYPES)
        if new_weather == self.weather:
            return None
        logger.info(f"Weather changed: {self.weather} -> {new_weather}")
        self.weather = new_weather
        return new_weather

    def seed_history(self, rng: random.Random) -> None:
        """Fill the history with a synthetic "Day 0" opening window."""
        for hour in range(self.config.history_length):
            self.price_history.append(
                PricePoint(
                    day=0,
                    hour=hour % 24,
                    price=0.08 + rng.random() * 0.08,
                    supply=1000 + rng.random() * 500,
                    demand=900 + rng.random() * 400,
                )
            )

    def record_volume(self, amount: float) -> None:
        self.volume += amount

    def snapshot(self) -> MarketSnapshot:
        return MarketSnapshot(
            price=self.current_price,
            supply=self.supply,
            demand=self.demand,
            volume=self.volume,
            weather=self.weather,
        )
