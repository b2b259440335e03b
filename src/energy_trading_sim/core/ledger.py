"""Trade validation and recording.

A buy pays ``amount × price`` in cash and adds ``amount`` kWh to the
player's energy balance; a sell does the reverse. Trades are rejected
when the player cannot cover them:

    buy:  cash < amount × price   -> InsufficientFundsError
    sell: energy_balance < amount -> InsufficientEnergyError

Non-positive or non-finite amounts and prices raise InvalidTradeError.
"""

import itertools
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from energy_trading_sim.core.constants import VISIBLE_TRADES
from energy_trading_sim.core.market import Market
from energy_trading_sim.core.participants import Player

logger = logging.getLogger(__name__)

TradeKind = Literal["buy", "sell"]


class TradeRejectedError(Exception):
    """A trade failed validation; ``str(err)`` is the user-facing message."""


class InsufficientFundsError(TradeRejectedError):
    def __init__(self) -> None:
        super().__init__("Insufficient funds")


class InsufficientEnergyError(TradeRejectedError):
    def __init__(self) -> None:
        super().__init__("Insufficient energy")


class InvalidTradeError(TradeRejectedError):
    def __init__(self) -> None:
        super().__init__("Please enter valid amount and price")


@dataclass(frozen=True)
class Trade:
    """An executed trade. Immutable once recorded."""

    trade_id: int
    trader_id: str
    trader_name: str
    kind: TradeKind
    amount: float
    price: float
    total_value: float
    timestamp: datetime
    automated: bool
    day: int
    hour: int


class TradeLedger:
    """Newest-first record of every trade on the market.

    Holds both the player's trades and third-party network trades. Only the
    player's trades touch the player's books.
    """

    def __init__(self) -> None:
        self._trades: list[Trade] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._trades)

    @property
    def trades(self) -> list[Trade]:
        return list(self._trades)

    def recent(self, n: int = VISIBLE_TRADES) -> list[Trade]:
        """Most recent ``n`` trades, newest first."""
        return self._trades[:n]

    def execute_trade(
        self,
        player: Player,
        market: Market,
        kind: TradeKind,
        amount: float,
        price: float,
        day: int,
        hour: int,
        automated: bool = False,
    ) -> Trade:
        """Validate and apply a player trade.

        Args:
            player: The trading player (mutated on success).
            market: Market whose volume grows by ``amount`` on success.
            kind: "buy" or "sell".
            amount: Energy quantity (kWh).
            price: Unit price ($/kWh).
            day: Simulated day of the trade.
            hour: Simulated hour of the trade.
            automated: Whether an automation rule placed the trade.

        Returns:
            The recorded Trade.

        Raises:
            InvalidTradeError: Amount or price is not a positive finite number.
            InsufficientFundsError: Buy costs more than the player's cash.
            InsufficientEnergyError: Sell exceeds the player's energy balance.
            ValueError: Unknown trade kind.
        """
        if not all(math.isfinite(v) and v > 0 for v in (amount, price)):
            raise InvalidTradeError()
        total = amount * price

        if kind == "buy":
            if player.cash < total:
                raise InsufficientFundsError()
            player.cash -= total
            player.energy_balance += amount
            profit = -total
        elif kind == "sell":
            if player.energy_balance < amount:
                raise InsufficientEnergyError()
            player.cash += total
            player.energy_balance -= amount
            profit = total
        else:
            raise ValueError(f"Unknown trade kind: {kind!r}")

        trade = self.record(
            trader_id=player.player_id,
            trader_name=player.name,
            kind=kind,
            amount=amount,
            price=price,
            automated=automated,
            day=day,
            hour=hour,
        )
        player.trade_count += 1
        player.daily_profit += profit
        player.total_profit += profit
        market.record_volume(amount)

        logger.info(
            f"{'Auto-' if automated else ''}{kind} {amount:.2f}kWh @ ${price:.3f} "
            f"by {player.name}: cash=${player.cash:.2f}"
        )
        return trade

    def record(
        self,
        trader_id: str,
        trader_name: str,
        kind: TradeKind,
        amount: float,
        price: float,
        automated: bool,
        day: int,
        hour: int,
    ) -> Trade:
        """Prepend a trade record without touching any books."""
        trade = Trade(
            trade_id=next(self._ids),
            trader_id=trader_id,
            trader_name=trader_name,
            kind=kind,
            amount=amount,
            price=price,
            total_value=amount * price,
            timestamp=datetime.now(),
            automated=automated,
            day=day,
            hour=hour,
        )
        self._trades.insert(0, trade)
        return trade
