"""Core game loop: pure business logic for one simulated hour.

Orchestrates the tick sequence:
    1. Clock advance (day rollover: reset daily profit, prune stale events)
    2. Market update (price, supply, demand, history, weather)
    3. Automation rules (read the price set in phase 2)
    4. Player energy settlement (generation, consumption, battery)
    5. Random event roll
    6. Leaderboard recompute
    7. End-of-run check

All functions operate on the explicit GameState with zero framework
dependencies (no Mesa, no event bus). Notifications are collected in order
on the returned TickOutcome and published by the caller.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from energy_trading_sim.core.constants import WEATHER_EFFECTS, Topics
from energy_trading_sim.core.ledger import Trade, TradeKind, TradeRejectedError
from energy_trading_sim.core.leaderboard import build_leaderboard, rank_of
from energy_trading_sim.core.random_events import (
    MarketEvent,
    prune_events,
    roll_random_event,
)
from energy_trading_sim.core.state import GameState
from energy_trading_sim.schemas import FinalReport

logger = logging.getLogger(__name__)


@dataclass
class TickOutcome:
    """Results from one tick of the game loop."""

    day: int
    hour: int
    new_day: int | None = None  # Day number entered this tick, if any
    weather_changed: str | None = None
    trades: list[Trade] = field(default_factory=list)
    trade_errors: list[str] = field(default_factory=list)
    energy: dict[str, float] | None = None
    random_event: MarketEvent | None = None
    final_report: FinalReport | None = None
    notifications: list[tuple[str, Any]] = field(default_factory=list)

    def notify(self, topic: str, payload: Any = None) -> None:
        self.notifications.append((topic, payload))


def execute_player_trade(
    state: GameState,
    kind: TradeKind,
    amount: float,
    price: float,
    automated: bool = False,
) -> Trade:
    """Validate and apply a trade for the current player.

    Raises:
        TradeRejectedError: Insufficient funds or energy.
        RuntimeError: No player has joined the game.
    """
    if state.player is None:
        raise RuntimeError("No player in game")
    return state.ledger.execute_trade(
        player=state.player,
        market=state.market,
        kind=kind,
        amount=amount,
        price=price,
        day=state.day,
        hour=state.hour,
        automated=automated,
    )


def start_new_day(state: GameState) -> None:
    """Day rollover: reset daily profit and drop events older than yesterday."""
    if state.player is not None:
        state.player.reset_daily_profit()
    state.events = prune_events(
        state.events, state.day, state.config.events.retention_days
    )
    logger.info(f"Day {state.day} begins")


def run_automation(state: GameState, outcome: TickOutcome) -> None:
    """Fire every enabled rule whose threshold the current price crosses."""
    player = state.player
    if player is None or player.participant_type is None:
        return
    price = state.market.current_price
    for rule in state.automation.rules:
        intent = state.automation.next_intent(rule, price, player.energy_balance)
        if intent is None:
            continue
        try:
            trade = execute_player_trade(
                state, intent.kind, intent.amount, intent.price, automated=True
            )
        except TradeRejectedError as e:
            logger.debug(f"Rule {rule.rule_id} rejected: {e}")
            outcome.trade_errors.append(str(e))
            outcome.notify(Topics.TRADE_ERROR, str(e))
            continue
        outcome.trades.append(trade)
        outcome.notify(Topics.TRADE_EXECUTED, trade)
        outcome.notify(Topics.PLAYER_UPDATED, player)


def update_player_energy(state: GameState, outcome: TickOutcome) -> None:
    """Settle this hour's generation and consumption for the player."""
    player = state.player
    if player is None or player.participant_type is None:
        return
    ptype = player.participant_type
    generation = ptype.generation * WEATHER_EFFECTS[state.market.weather]["solar"]
    consumption = ptype.consumption
    net = player.settle_energy(generation, consumption)
    outcome.energy = {
        "generation": generation,
        "consumption": consumption,
        "battery": player.battery_level,
        "net_energy": net,
    }
    outcome.notify(Topics.PLAYER_ENERGY_UPDATED, outcome.energy)


def build_final_report(state: GameState) -> FinalReport:
    player = state.player
    return FinalReport(
        total_profit=player.total_profit if player else 0.0,
        total_trades=player.trade_count if player else 0,
        final_rank=rank_of(state.leaderboard, player.name) if player else 0,
        days_played=state.clock.days_played,
    )


def execute_tick(state: GameState, rng: random.Random | None = None) -> TickOutcome:
    """Execute one simulated hour.

    Args:
        state: Game state (mutated in place).
        rng: Seeded RNG for price noise, weather and events.

    Returns:
        TickOutcome with the ordered notifications for this tick.
    """
    _rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Phase 1: Clock
    # ------------------------------------------------------------------
    rolled_over = state.clock.advance()
    outcome = TickOutcome(day=state.day, hour=state.hour)
    if rolled_over:
        start_new_day(state)
        outcome.new_day = state.day
        outcome.notify(Topics.NEW_DAY, state.day)

    # ------------------------------------------------------------------
    # Phase 2: Market
    # ------------------------------------------------------------------
    new_weather = state.market.update(
        hour=state.hour,
        day=state.day,
        participant_demand=state.participant_demand(),
        rng=_rng,
    )
    if new_weather is not None:
        outcome.weather_changed = new_weather
        outcome.notify(Topics.WEATHER_CHANGED, {"weather": new_weather})

    # ------------------------------------------------------------------
    # Phase 3: Automation (must see the price from phase 2)
    # ------------------------------------------------------------------
    run_automation(state, outcome)

    # ------------------------------------------------------------------
    # Phase 4: Player energy
    # ------------------------------------------------------------------
    update_player_energy(state, outcome)

    # ------------------------------------------------------------------
    # Phase 5: Random events
    # ------------------------------------------------------------------
    event = roll_random_event(
        _rng, state.config.events.random_event_prob, state.day, state.hour
    )
    if event is not None:
        state.events.append(event)
        outcome.random_event = event
        outcome.notify(Topics.RANDOM_EVENT, event)
        logger.info(f"Random event on day {state.day}: {event.title}")

    # ------------------------------------------------------------------
    # Phase 6: Leaderboard
    # ------------------------------------------------------------------
    state.leaderboard = build_leaderboard(state.player)
    outcome.notify(Topics.GAME_STATE_UPDATED, state)

    # ------------------------------------------------------------------
    # Phase 7: End of run
    # ------------------------------------------------------------------
    if state.clock.is_finished:
        state.is_finished = True
        outcome.final_report = build_final_report(state)
        outcome.notify(Topics.GAME_ENDED, outcome.final_report)
        logger.info(
            f"Run ended after {outcome.final_report.days_played} days: "
            f"profit=${outcome.final_report.total_profit:.2f}, "
            f"rank={outcome.final_report.final_rank}"
        )

    return outcome
