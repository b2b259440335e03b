"""Mesa model integration for the Energy Trading Simulator."""

import mesa

from energy_trading_sim.core.game_loop import TickOutcome, execute_tick
from energy_trading_sim.core.participants import DemoParticipant, Player
from energy_trading_sim.core.state import GameState
from energy_trading_sim.schemas import GameConfig, PlayerSnapshot, TickResult
from energy_trading_sim.services.data_collect import MODEL_REPORTERS


def apply_overrides(config: GameConfig, **kwargs) -> GameConfig:
    """Return ``config`` with nested ``section__field=value`` overrides applied."""
    if not kwargs:
        return config
    config_dict = config.model_dump()
    for key, value in kwargs.items():
        parts = key.split("__")
        target = config_dict
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    # Re-validate to ensure nested objects are recreated
    return GameConfig.model_validate(config_dict)


class MesaPlayer(mesa.Agent):
    """Mesa wrapper for the human player's books.

    Attributes:
        domain_agent: The underlying Player domain object.
    """

    def __init__(self, model: mesa.Model, player: Player) -> None:
        super().__init__(model)
        self.domain_agent = player

    def step(self) -> None:
        """Model controls phase order explicitly; nothing to do per agent."""
        pass


class MesaParticipant(mesa.Agent):
    """Mesa wrapper for a simulated network trader."""

    def __init__(self, model: mesa.Model, participant: DemoParticipant) -> None:
        super().__init__(model)
        self.domain_agent = participant

    @property
    def online(self) -> bool:
        return self.domain_agent.online

    def step(self) -> None:
        pass


class EnergyTradingModel(mesa.Model):
    """The central Mesa model.

    Owns the GameState and the seeded RNG, delegates each step to the core
    game loop and records per-tick series in a DataCollector.
    """

    def __init__(self, config: GameConfig | None = None, **kwargs) -> None:
        """Initialize the model.

        Args:
            config: Full game configuration.
            **kwargs: Overrides for configuration parameters
                (for Mesa batch runs), e.g. ``market__base_price=0.2``.
        """
        config = apply_overrides(config or GameConfig(), **kwargs)

        super().__init__(seed=config.seed)
        self.config = config
        self.running = True

        self.state = GameState.from_config(config)
        self.state.market.seed_history(self.random)

        for participant in self.state.participants.values():
            MesaParticipant(self, participant)

        self.last_outcome: TickOutcome | None = None
        self.tick_results: list[TickResult] = []

        self.datacollector = mesa.DataCollector(model_reporters=MODEL_REPORTERS)

    def join(self, player_id: str, name: str) -> Player:
        """Create the player and register its Mesa agent."""
        for agent in list(self.agents):
            if isinstance(agent, MesaPlayer):
                agent.remove()
        player = Player(player_id, name)
        self.state.player = player
        MesaPlayer(self, player)
        return player

    def participant_agents(self) -> list[MesaParticipant]:
        return [a for a in self.agents if isinstance(a, MesaParticipant)]

    def step(self) -> None:
        """Execute one simulated hour (delegates to the core game loop)."""
        if self.state.is_finished:
            self.running = False
            return

        outcome = execute_tick(self.state, rng=self.random)
        self.last_outcome = outcome
        self.tick_results.append(self._tick_result(outcome))
        self.datacollector.collect(self)

        if self.state.is_finished:
            self.running = False

    def _tick_result(self, outcome: TickOutcome) -> TickResult:
        player = self.state.player
        player_snapshot = None
        if player is not None:
            player_snapshot = PlayerSnapshot(
                cash=round(player.cash, 4),
                energy_balance=round(player.energy_balance, 4),
                battery_level=round(player.battery_level, 4),
                total_profit=round(player.total_profit, 4),
                daily_profit=round(player.daily_profit, 4),
                trade_count=player.trade_count,
            )
        return TickResult(
            step=len(self.tick_results) + 1,
            day=outcome.day,
            hour=outcome.hour,
            market=self.state.market.snapshot(),
            player=player_snapshot,
            automated_trades=len(outcome.trades),
            events=[outcome.random_event.event_type] if outcome.random_event else [],
        )
