"""Simulated day/hour clock."""

from energy_trading_sim.core.constants import HOURS_PER_DAY
from energy_trading_sim.schemas import ClockConfig


class GameClock:
    """Advances one simulated hour per tick.

    Attributes:
        day: Current day, starting at ``config.start_day``.
        hour: Current hour of day (0-23).
        max_days: The run is over once ``day`` exceeds this.
    """

    def __init__(self, config: ClockConfig | None = None) -> None:
        config = config or ClockConfig()
        self.day: int = config.start_day
        self.hour: int = config.start_hour
        self.max_days: int = config.max_days

    def advance(self) -> bool:
        """Move forward one hour.

        Returns:
            True if the hour wrapped past 23 into a new day.
        """
        self.hour += 1
        if self.hour >= HOURS_PER_DAY:
            self.hour = 0
            self.day += 1
            return True
        return False

    @property
    def is_finished(self) -> bool:
        return self.day > self.max_days

    @property
    def days_played(self) -> int:
        return self.day - 1
