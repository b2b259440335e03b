"""Game engine - the single controller of a game run.

This module contains the GameEngine, which owns the Mesa model (and with it
the explicit GameState), the event bus and the scheduler. It exposes the
presentation-facing API: subscriptions, player setup, trade submission,
automation rules, lifecycle controls and read accessors.

Time only moves when a driver calls ``advance`` (or ``tick`` for a single
step). ``play_loop`` is the real-time driver.
"""

import asyncio
import logging
import time
from typing import Any, Callable

from energy_trading_sim.core.automation import AutomationRule, RuleKind
from energy_trading_sim.core.constants import VISIBLE_TRADES, Topics
from energy_trading_sim.core.events import EventBus
from energy_trading_sim.core.game_loop import TickOutcome, execute_player_trade
from energy_trading_sim.core.ledger import Trade, TradeKind, TradeRejectedError
from energy_trading_sim.core.market import Market
from energy_trading_sim.core.participants import CATALOG, Player
from energy_trading_sim.core.scheduler import Scheduler
from energy_trading_sim.core.state import GameState
from energy_trading_sim.schemas import (
    FinalReport,
    GameConfig,
    GameRun,
    LeaderboardEntry,
)
from energy_trading_sim.services.model_wrapper import EnergyTradingModel
from energy_trading_sim.services.network import NetworkSimulator

logger = logging.getLogger(__name__)


class GameEngine:
    """Stateful game controller with injectable bus and scheduler.

    Attributes:
        config: Game configuration.
        bus: Event bus the presentation layer subscribes to.
        scheduler: Timer scheduler; the tick job and network timers live here.
        model: Mesa model owning the GameState.
        network: Simulated network collaborator.
        final_report: Set once the run has ended.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        bus: EventBus | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.bus = bus or EventBus()
        self.scheduler = scheduler or Scheduler()
        self.model = EnergyTradingModel(self.config)
        self.network = NetworkSimulator(self.model, self.bus, self.scheduler)
        self.final_report: FinalReport | None = None
        self._tick_job: int | None = None

    @classmethod
    def from_config(cls, config: GameConfig, **kwargs) -> "GameEngine":
        """Build an engine with the player, archetype and rules of a scenario."""
        engine = cls(config, **kwargs)
        engine.init_player("player-1", config.player_name)
        if not engine.select_participant_type(config.participant_type):
            raise ValueError(f"Unknown participant type: {config.participant_type}")
        for rule in config.automation:
            added = engine.add_automation_rule(rule.kind, rule.price_threshold)
            if not rule.enabled:
                engine.toggle_automation_rule(added.rule_id, False)
        if config.network.enabled:
            engine.network.connect(config.player_name)
        return engine

    @property
    def state(self) -> GameState:
        return self.model.state

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on(self, topic: str, handler: Callable[[Any], None]) -> None:
        self.bus.on(topic, handler)

    # ------------------------------------------------------------------
    # Player setup
    # ------------------------------------------------------------------

    def init_player(self, player_id: str, name: str) -> Player:
        player = self.model.join(player_id, name)
        logger.info(f"Player {name} ({player_id}) joined")
        return player

    def select_participant_type(self, key: str) -> bool:
        """Assign an archetype to the player.

        Returns:
            False (without publishing anything) if there is no player or the
            key is not in the catalogue.
        """
        player = self.state.player
        participant_type = CATALOG.get(key)
        if player is None or participant_type is None:
            logger.warning(f"Cannot select participant type {key!r}")
            return False
        player.assign_type(participant_type)
        self.bus.emit(Topics.PLAYER_UPDATED, player)
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the recurring tick timer."""
        if self.state.is_running:
            return
        if self.state.is_finished:
            logger.warning("Cannot start: run has already ended")
            return
        self.state.is_running = True
        self.state.is_paused = False
        self._tick_job = self.scheduler.every(
            self.config.clock.tick_interval_ms, self._on_timer
        )
        logger.info(
            f"Game started at day {self.state.day}, {self.state.hour}:00 "
            f"({self.config.clock.tick_interval_ms}ms per hour)"
        )
        self.bus.emit(Topics.GAME_STARTED)

    def pause(self) -> bool:
        """Toggle pause. The timer keeps firing; paused ticks do no work.

        Returns:
            The new paused flag.
        """
        self.state.is_paused = not self.state.is_paused
        self.bus.emit(Topics.GAME_PAUSED, self.state.is_paused)
        return self.state.is_paused

    def resume(self) -> None:
        if self.state.is_paused:
            self.pause()

    def stop(self) -> None:
        """Clear the tick timer."""
        if self._tick_job is not None:
            self.scheduler.cancel(self._tick_job)
            self._tick_job = None
        self.state.is_running = False
        self.state.is_paused = False
        logger.info("Game stopped")
        self.bus.emit(Topics.GAME_STOPPED)

    def advance(self, elapsed_ms: int) -> int:
        """Move simulated time forward; returns the number of timer callbacks fired."""
        return self.scheduler.advance(elapsed_ms)

    def _on_timer(self) -> None:
        if self.state.is_paused:
            return
        self.tick()

    def tick(self) -> TickOutcome | None:
        """Run exactly one simulated hour and publish its notifications."""
        if self.state.is_finished:
            logger.warning("Tick ignored: run has already ended")
            return None
        self.model.step()
        outcome = self.model.last_outcome
        self._publish(outcome)
        return outcome

    def _publish(self, outcome: TickOutcome) -> None:
        for topic, payload in outcome.notifications:
            if topic == Topics.GAME_ENDED:
                self.final_report = outcome.final_report
                self.stop()
            self.bus.emit(topic, payload)

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    def submit_trade(self, kind: TradeKind, amount: float, price: float) -> bool:
        """Execute a manual trade for the player.

        Rejections are published on ``trade_error`` with the reason.
        """
        if self.state.player is None:
            logger.warning("Trade ignored: no player in game")
            return False
        try:
            trade = execute_player_trade(self.state, kind, amount, price)
        except TradeRejectedError as e:
            logger.info(f"Trade rejected: {e}")
            self.bus.emit(Topics.TRADE_ERROR, str(e))
            return False
        self.bus.emit(Topics.TRADE_EXECUTED, trade)
        self.bus.emit(Topics.PLAYER_UPDATED, self.state.player)
        if self.network.is_connected:
            self.network.send_trade(trade)
        return True

    def add_automation_rule(
        self, kind: RuleKind, price_threshold: float
    ) -> AutomationRule:
        rule = self.state.automation.add_rule(kind, price_threshold)
        self.bus.emit(Topics.AUTOMATION_RULE_ADDED, rule)
        return rule

    def toggle_automation_rule(self, rule_id: int, enabled: bool) -> bool:
        rule = self.state.automation.toggle_rule(rule_id, enabled)
        if rule is None:
            return False
        self.bus.emit(
            Topics.AUTOMATION_RULE_TOGGLED, {"rule_id": rule_id, "enabled": enabled}
        )
        return True

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_game_state(self) -> GameState:
        return self.state

    def get_player(self) -> Player | None:
        return self.state.player

    def get_market(self) -> Market:
        return self.state.market

    def get_leaderboard(self) -> list[LeaderboardEntry]:
        return list(self.state.leaderboard)

    def get_trades(self) -> list[Trade]:
        return self.state.ledger.recent(VISIBLE_TRADES)

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def run_headless(self, max_ticks: int | None = None) -> GameRun:
        """Drive the scheduler until the run ends (or ``max_ticks`` hours pass)."""
        self.start()
        interval = self.config.clock.tick_interval_ms
        ticks = 0
        while self.state.is_running and (max_ticks is None or ticks < max_ticks):
            self.advance(interval)
            ticks += 1
        if self.state.is_running:
            self.stop()
        return self.pack_run()

    async def play_loop(self, speed: float = 1.0) -> None:
        """Async loop mapping wall-clock time onto the scheduler.

        Args:
            speed: Simulated milliseconds per real millisecond.
        """
        if not self.state.is_running:
            return

        logger.info("Play loop started")
        interval_s = self.config.clock.tick_interval_ms / 1000 / speed
        last = time.monotonic()
        try:
            while self.state.is_running:
                await asyncio.sleep(interval_s)
                now = time.monotonic()
                self.advance(int((now - last) * 1000 * speed))
                last = now
        except asyncio.CancelledError:
            logger.debug("Play loop task cancelled gracefully.")
            raise
        except Exception as e:
            logger.error(f"Error in play loop: {e}", exc_info=True)
            self.stop()

    def pack_run(self) -> GameRun:
        """Package the run so far for export."""
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        return GameRun(
            id=f"run_{timestamp}",
            config=self.config,
            ticks=list(self.model.tick_results),
            report=self.final_report,
        )
