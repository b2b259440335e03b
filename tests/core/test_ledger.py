"""Tests for trade validation and the trade ledger."""

import math

import pytest

from energy_trading_sim.core.ledger import (
    InsufficientEnergyError,
    InsufficientFundsError,
    InvalidTradeError,
    TradeLedger,
    TradeRejectedError,
)
from energy_trading_sim.core.market import Market


def _trade(ledger, player, market, kind, amount, price, **kwargs):
    return ledger.execute_trade(
        player=player,
        market=market,
        kind=kind,
        amount=amount,
        price=price,
        day=1,
        hour=7,
        **kwargs,
    )


def test_buy_debits_cash_and_credits_energy(player_factory) -> None:
    """Residential player with $500 buys 10 kWh at $0.12."""
    player = player_factory("residential")
    market = Market()
    ledger = TradeLedger()

    trade = _trade(ledger, player, market, "buy", 10, 0.12)

    assert player.cash == pytest.approx(498.80)
    assert player.energy_balance == pytest.approx(10)
    assert player.trade_count == 1
    assert player.total_profit == pytest.approx(-1.20)
    assert player.daily_profit == pytest.approx(-1.20)
    assert market.volume == pytest.approx(350.0)
    assert trade.total_value == pytest.approx(1.20)
    assert trade.trader_id == "player-1"
    assert not trade.automated
    assert (trade.day, trade.hour) == (1, 7)


def test_sell_credits_cash_and_debits_energy(player_factory) -> None:
    player = player_factory("residential", energy_balance=10.0)
    market = Market()
    ledger = TradeLedger()

    _trade(ledger, player, market, "sell", 10, 0.2)

    assert player.cash == pytest.approx(502.0)
    assert player.energy_balance == pytest.approx(0.0)
    assert player.total_profit == pytest.approx(2.0)


def test_sell_without_energy_is_rejected(player_factory) -> None:
    player = player_factory("residential")
    market = Market()
    ledger = TradeLedger()

    with pytest.raises(InsufficientEnergyError) as exc_info:
        _trade(ledger, player, market, "sell", 5, 0.12)

    assert str(exc_info.value) == "Insufficient energy"
    assert player.cash == 500.0
    assert player.trade_count == 0
    assert len(ledger) == 0
    assert market.volume == 340.0


def test_buy_beyond_cash_is_rejected(player_factory) -> None:
    player = player_factory("residential")
    ledger = TradeLedger()

    with pytest.raises(InsufficientFundsError) as exc_info:
        _trade(ledger, player, Market(), "buy", 10_000, 0.12)

    assert str(exc_info.value) == "Insufficient funds"
    assert isinstance(exc_info.value, TradeRejectedError)
    assert player.energy_balance == 0.0
    assert len(ledger) == 0


def test_exact_cash_and_exact_energy_are_allowed(player_factory) -> None:
    player = player_factory("residential", cash=5.0)
    ledger = TradeLedger()
    market = Market()

    _trade(ledger, player, market, "buy", 10, 0.5)
    assert player.cash == 0.0
    assert player.energy_balance == 10

    _trade(ledger, player, market, "sell", 10, 0.5)
    assert player.energy_balance == 0
    assert player.trade_count == 2


def test_unknown_kind_raises(player_factory) -> None:
    with pytest.raises(ValueError):
        _trade(TradeLedger(), player_factory(), Market(), "swap", 1, 0.1)


def test_ledger_is_newest_first(player_factory) -> None:
    player = player_factory("commercial")
    market = Market()
    ledger = TradeLedger()
    for _ in range(12):
        _trade(ledger, player, market, "buy", 1, 0.1)

    assert len(ledger) == 12
    recent = ledger.recent()
    assert len(recent) == 10
    assert recent[0].trade_id == 12
    assert recent[-1].trade_id == 3
    assert [t.trade_id for t in ledger.recent(2)] == [12, 11]


def test_record_does_not_touch_books(player_factory) -> None:
    player = player_factory("residential")
    ledger = TradeLedger()

    trade = ledger.record(
        trader_id="demo1",
        trader_name="EcoTrader_42",
        kind="sell",
        amount=20,
        price=0.1,
        automated=True,
        day=1,
        hour=9,
    )

    assert ledger.trades == [trade]
    assert trade.total_value == pytest.approx(2.0)
    assert player.cash == 500.0
    assert player.trade_count == 0


@pytest.mark.parametrize(
    "kind, amount, price",
    [
        ("sell", -10_000, 0.12),
        ("buy", -5, 0.12),
        ("buy", 0, 0.12),
        ("sell", 10, 0),
        ("buy", 10, -0.12),
        ("buy", math.nan, 0.12),
        ("sell", 10, math.nan),
        ("buy", math.inf, 0.12),
    ],
)
def test_invalid_amount_or_price_is_rejected(player_factory, kind, amount, price) -> None:
    player = player_factory("residential", energy_balance=10.0)
    market = Market()
    ledger = TradeLedger()

    with pytest.raises(InvalidTradeError) as exc_info:
        _trade(ledger, player, market, kind, amount, price)

    assert str(exc_info.value) == "Please enter valid amount and price"
    assert isinstance(exc_info.value, TradeRejectedError)
    assert player.cash == 500.0
    assert player.energy_balance == 10.0
    assert player.trade_count == 0
    assert market.volume == 340.0
    assert len(ledger) == 0
