"""Centralized metrics calculation for run data.

Pure functions over tick results, trades and price history, shared by the
headless runner and the exporters.
"""

from typing import List

import pandas as pd

from energy_trading_sim.core.ledger import Trade
from energy_trading_sim.core.market import PricePoint
from energy_trading_sim.schemas import TickResult


def ticks_to_frame(ticks: List[TickResult]) -> pd.DataFrame:
    """Flatten tick results into one row per simulated hour."""
    rows = []
    for t in ticks:
        row = {"step": t.step, "day": t.day, "hour": t.hour}
        row.update({f"market_{k}": v for k, v in t.market.model_dump().items()})
        if t.player is not None:
            row.update({f"player_{k}": v for k, v in t.player.model_dump().items()})
        row["automated_trades"] = t.automated_trades
        row["events"] = ",".join(t.events)
        rows.append(row)
    return pd.DataFrame(rows)


def trades_to_frame(trades: List[Trade]) -> pd.DataFrame:
    columns = [
        "trade_id",
        "trader_id",
        "trader_name",
        "kind",
        "amount",
        "price",
        "total_value",
        "timestamp",
        "automated",
        "day",
        "hour",
    ]
    return pd.DataFrame(
        [{c: getattr(t, c) for c in columns} for t in trades], columns=columns
    )


def price_history_to_frame(history) -> pd.DataFrame:
    """Rolling price history (iterable of PricePoint) as a DataFrame."""
    points: List[PricePoint] = list(history)
    return pd.DataFrame(
        {
            "time": [p.label for p in points],
            "price": [p.price for p in points],
            "supply": [p.supply for p in points],
            "demand": [p.demand for p in points],
        }
    )


def summarize_prices(ticks: List[TickResult]) -> dict[str, float]:
    """Mean/min/max price over a run. Zeros when there are no ticks."""
    if not ticks:
        return {"mean_price": 0.0, "min_price": 0.0, "max_price": 0.0}
    prices = pd.Series([t.market.price for t in ticks])
    return {
        "mean_price": float(prices.mean()),
        "min_price": float(prices.min()),
        "max_price": float(prices.max()),
    }


def daily_profit_table(ticks: List[TickResult]) -> pd.DataFrame:
    """Last recorded daily profit per day (the value just before rollover)."""
    df = ticks_to_frame(ticks)
    if df.empty or "player_daily_profit" not in df:
        return pd.DataFrame(columns=["day", "daily_profit"])
    last = df.groupby("day", as_index=False).last()
    return last[["day", "player_daily_profit"]].rename(
        columns={"player_daily_profit": "daily_profit"}
    )
