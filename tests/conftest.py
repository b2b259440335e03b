"""Shared test fixtures."""

import random
from typing import Callable

import pytest

from energy_trading_sim.core.participants import Player
from energy_trading_sim.core.state import GameState
from energy_trading_sim.schemas import GameConfig, TickResult
from energy_trading_sim.services.simulation import GameEngine
from .factories import create_game_config, create_player, create_tick_result


@pytest.fixture
def game_config_factory() -> Callable[..., GameConfig]:
    """Fixture that returns the game config factory function."""
    return create_game_config


@pytest.fixture
def player_factory() -> Callable[..., Player]:
    return create_player


@pytest.fixture
def tick_result_factory() -> Callable[..., TickResult]:
    return create_tick_result


@pytest.fixture
def basic_config() -> GameConfig:
    """Return a seeded configuration with random events switched off."""
    return create_game_config()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def state(basic_config: GameConfig) -> GameState:
    """Return a game state with a residential player already joined."""
    game_state = GameState.from_config(basic_config)
    game_state.player = create_player("residential")
    return game_state


@pytest.fixture
def engine(basic_config: GameConfig) -> GameEngine:
    """Return an engine with a residential player, not yet started."""
    game = GameEngine(basic_config)
    game.init_player("player-1", "Tester")
    game.select_participant_type("residential")
    return game


@pytest.fixture
def recorder():
    """Return a factory that subscribes a list to a topic on a bus-like object."""

    def _record(target, topic: str) -> list:
        received: list = []
        target.on(topic, received.append)
        return received

    return _record
