"""Simulated multiplayer network.

There is no wire protocol: other traders, their trades and the market
noise they cause are randomized on scheduler timers and fed into the same
event bus the rest of the game uses.

Timers (defaults):
    presence  every 10 s: each demo trader flips online with p = 0.1
    trades    every  5 s: with p = 0.3 a random online trader trades
    jitter    every  2 s: price ± 0.005, supply ± 50, demand ± 40
"""

import logging
import math
from typing import TYPE_CHECKING, Any

from energy_trading_sim.core.constants import Topics
from energy_trading_sim.core.events import EventBus
from energy_trading_sim.core.ledger import Trade
from energy_trading_sim.core.scheduler import Scheduler
from energy_trading_sim.schemas import NetworkConfig

if TYPE_CHECKING:
    from energy_trading_sim.services.model_wrapper import EnergyTradingModel

logger = logging.getLogger(__name__)


class NetworkSimulator:
    """Drives simulated third-party activity on its own timers."""

    def __init__(
        self,
        model: "EnergyTradingModel",
        bus: EventBus,
        scheduler: Scheduler,
        config: NetworkConfig | None = None,
    ) -> None:
        self.model = model
        self.bus = bus
        self.scheduler = scheduler
        self.config = config or model.config.network
        self.is_connected: bool = False
        self.username: str | None = None
        self._jobs: list[int] = []

    @property
    def rng(self):
        return self.model.random

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self, username: str) -> None:
        """Join the simulated network and start the activity timers."""
        if self.is_connected:
            logger.warning(f"Already connected as {self.username}")
            return
        self.username = username
        self.is_connected = True
        cfg = self.config
        self._jobs = [
            self.scheduler.every(cfg.presence_interval_ms, self.simulate_presence),
            self.scheduler.every(cfg.trade_interval_ms, self.maybe_simulate_trade),
            self.scheduler.every(cfg.jitter_interval_ms, self.simulate_market_activity),
        ]
        logger.info(f"Connected to simulated network as {username}")

    def disconnect(self) -> None:
        for job_id in self._jobs:
            self.scheduler.cancel(job_id)
        self._jobs = []
        if self.is_connected:
            logger.info("Disconnected from simulated network")
        self.is_connected = False

    def connection_status(self) -> dict[str, Any]:
        return {"connected": self.is_connected, "username": self.username}

    # ------------------------------------------------------------------
    # Simulated activity
    # ------------------------------------------------------------------

    def simulate_presence(self) -> None:
        """Randomly flip each demo trader's online status."""
        for participant in self.model.state.participants.values():
            if self.rng.random() < self.config.presence_toggle_prob:
                participant.online = not participant.online

    def maybe_simulate_trade(self) -> Trade | None:
        if self.rng.random() < self.config.trade_prob:
            return self.simulate_random_trade()
        return None

    def simulate_random_trade(self) -> Trade | None:
        """Record a trade by a random demo trader, if the one drawn is online."""
        agents = self.model.participant_agents()
        if not agents:
            return None
        participant = self.rng.choice(agents).domain_agent
        if not participant.online:
            return None

        state = self.model.state
        cfg = self.config
        kind = self.rng.choice(("buy", "sell"))
        amount = self.rng.randint(cfg.trade_amount_min, cfg.trade_amount_max)
        spread = cfg.trade_price_spread
        price = state.market.current_price * (
            (1 - spread) + self.rng.random() * 2 * spread
        )
        trade = state.ledger.record(
            trader_id=participant.participant_id,
            trader_name=participant.name,
            kind=kind,
            amount=amount,
            price=price,
            automated=self.rng.random() < cfg.trade_automated_prob,
            day=state.day,
            hour=state.hour,
        )
        state.market.record_volume(amount)
        self.bus.emit(Topics.NETWORK_TRADE_EXECUTED, trade)
        logger.debug(
            f"Network trade: {participant.name} {kind} {amount}kWh @ ${price:.3f}"
        )
        return trade

    def simulate_market_activity(self) -> None:
        """Apply small random fluctuations from other traders."""
        market = self.model.state.market
        cfg = self.config
        fluctuation = (self.rng.random() - 0.5) * 2 * cfg.jitter_price
        market.current_price = market.clamp(market.current_price + fluctuation)
        market.supply += math.floor((self.rng.random() - 0.5) * 2 * cfg.jitter_supply)
        market.demand += math.floor((self.rng.random() - 0.5) * 2 * cfg.jitter_demand)
        market.supply = max(cfg.supply_floor, market.supply)
        market.demand = max(cfg.demand_floor, market.demand)

    def send_trade(self, trade: Trade) -> int:
        """Broadcast a player trade; confirmation arrives after a short latency.

        Returns:
            The scheduler job id of the pending confirmation.
        """
        delay = self.rng.randint(
            self.config.confirm_latency_min_ms, self.config.confirm_latency_max_ms
        )

        def _confirm() -> None:
            self.bus.emit(
                Topics.NETWORK_TRADE_CONFIRMED,
                {"trade": trade, "network_id": self.scheduler.now_ms, "confirmed": True},
            )

        return self.scheduler.after(delay, _confirm)
