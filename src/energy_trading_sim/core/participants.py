"""Participant archetypes and player state.

The catalogue is a fixed table of archetypes a player can choose from.
Each archetype defines the player's hourly generation and consumption
(kWh), battery capacity (kWh) and starting cash ($).
"""

import logging
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticipantType:
    """Immutable catalogue entry describing a participant archetype."""

    key: str
    name: str
    generation: float
    consumption: float
    battery_capacity: float
    automation_level: int
    risk_tolerance: int
    starting_cash: float
    assets: tuple[str, ...] = ()


_ARCHETYPES = (
    ParticipantType(
        key="residential",
        name="Residential Prosumer",
        generation=8,
        consumption=12,
        battery_capacity=15,
        automation_level=4,
        risk_tolerance=3,
        starting_cash=500,
        assets=("5kW Solar Panels", "10kWh Battery", "Smart Home System"),
    ),
    ParticipantType(
        key="commercial",
        name="Commercial Prosumer",
        generation=150,
        consumption=200,
        battery_capacity=300,
        automation_level=7,
        risk_tolerance=6,
        starting_cash=5000,
        assets=("100kW Solar Array", "200kWh Battery Bank", "Building Management System"),
    ),
    ParticipantType(
        key="industrial",
        name="Industrial Consumer",
        generation=50,
        consumption=800,
        battery_capacity=100,
        automation_level=6,
        risk_tolerance=8,
        starting_cash=10000,
        assets=("Backup Generators", "Load Management System", "Process Flexibility"),
    ),
    ParticipantType(
        key="community",
        name="Energy Community",
        generation=300,
        consumption=250,
        battery_capacity=500,
        automation_level=8,
        risk_tolerance=4,
        starting_cash=2000,
        assets=("Community Solar Farm", "Shared Battery Storage", "Smart Grid Management"),
    ),
)


class ParticipantCatalog:
    """Read-only lookup of participant archetypes by key."""

    def __init__(self, archetypes: tuple[ParticipantType, ...] = _ARCHETYPES) -> None:
        self._by_key: dict[str, ParticipantType] = {a.key: a for a in archetypes}

    def get(self, key: str | None) -> ParticipantType | None:
        """Return the archetype for ``key``, or None if unknown."""
        if key is None:
            return None
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return list(self._by_key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[ParticipantType]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)


CATALOG = ParticipantCatalog()


class Player:
    """The human player's books.

    Attributes:
        player_id: Unique identifier.
        name: Display name (used for leaderboard ranking).
        cash: Available cash ($).
        energy_balance: Tradable energy this hour (kWh). Positive is a
            surplus that can be sold, negative a deficit to be bought.
        battery_level: Stored energy (kWh), within [0, battery_capacity].
        total_profit: Net trading result since the start of the run.
        daily_profit: Net trading result since the last day rollover.
        trade_count: Number of successful trades.
        participant_type: Selected archetype, None until chosen.
    """

    def __init__(self, player_id: str, name: str) -> None:
        self.player_id: str = player_id
        self.name: str = name
        self.cash: float = 0.0
        self.energy_balance: float = 0.0
        self.battery_level: float = 0.0
        self.total_profit: float = 0.0
        self.daily_profit: float = 0.0
        self.trade_count: int = 0
        self.participant_type: ParticipantType | None = None

    @property
    def battery_capacity(self) -> float:
        if self.participant_type is None:
            return 0.0
        return self.participant_type.battery_capacity

    def assign_type(self, participant_type: ParticipantType) -> None:
        """Adopt an archetype: starting cash and a half-charged battery."""
        self.participant_type = participant_type
        self.cash = float(participant_type.starting_cash)
        self.battery_level = participant_type.battery_capacity * 0.5
        logger.info(
            f"Player {self.name} is now {participant_type.name} "
            f"(cash=${self.cash:.2f}, battery={self.battery_level:.1f}kWh)"
        )

    def settle_energy(self, generation: float, consumption: float) -> float:
        """Run one hour of generation and consumption through the battery.

        A surplus charges the battery up to capacity; whatever does not fit
        becomes the tradable energy balance. A deficit drains the battery and
        whatever it cannot cover becomes a negative energy balance. The
        balance is replaced, not accumulated.

        Returns:
            The new energy balance.
        """
        net = generation - consumption
        if net > 0:
            room = self.battery_capacity - self.battery_level
            to_battery = min(net, room)
            self.battery_level += to_battery
            self.energy_balance = net - to_battery
        else:
            from_battery = min(-net, self.battery_level)
            self.battery_level -= from_battery
            self.energy_balance = net + from_battery
        return self.energy_balance

    def reset_daily_profit(self) -> None:
        self.daily_profit = 0.0


@dataclass
class DemoParticipant:
    """A simulated third-party trader on the network."""

    participant_id: str
    name: str
    participant_type: str
    online: bool = True
    current_consumption: float = 0.0
