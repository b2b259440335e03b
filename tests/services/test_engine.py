"""Tests for the GameEngine controller."""

import asyncio
import math

import pytest

from energy_trading_sim.core.constants import Topics
from energy_trading_sim.schemas import AutomationRuleConfig, ClockConfig
from energy_trading_sim.services.simulation import GameEngine

# Hours from day 1, 06:00 to day 8, 00:00
FULL_RUN_TICKS = 18 + 6 * 24


def test_submit_trade_updates_player(engine, recorder) -> None:
    executed = recorder(engine, Topics.TRADE_EXECUTED)
    updated = recorder(engine, Topics.PLAYER_UPDATED)

    assert engine.submit_trade("buy", 10, 0.12)

    player = engine.get_player()
    assert player.cash == pytest.approx(498.80)
    assert player.energy_balance == pytest.approx(10)
    assert len(executed) == 1
    assert updated == [player]
    assert engine.get_trades() == executed


def test_rejected_trade_publishes_reason(engine, recorder) -> None:
    errors = recorder(engine, Topics.TRADE_ERROR)
    executed = recorder(engine, Topics.TRADE_EXECUTED)

    assert not engine.submit_trade("sell", 100, 0.12)
    assert not engine.submit_trade("buy", 10_000, 0.12)

    assert errors == ["Insufficient energy", "Insufficient funds"]
    assert executed == []
    assert engine.get_player().cash == 500.0


@pytest.mark.parametrize(
    "kind, amount, price",
    [("sell", -10_000, 0.12), ("buy", 0, 0.12), ("buy", math.nan, 0.12), ("buy", 10, -1.0)],
)
def test_invalid_trade_publishes_reason(engine, recorder, kind, amount, price) -> None:
    errors = recorder(engine, Topics.TRADE_ERROR)
    executed = recorder(engine, Topics.TRADE_EXECUTED)

    assert not engine.submit_trade(kind, amount, price)

    assert errors == ["Please enter valid amount and price"]
    assert executed == []
    player = engine.get_player()
    assert player.cash == 500.0
    assert player.energy_balance == 0.0
    assert engine.get_market().volume == 340.0
    assert engine.get_trades() == []


def test_trade_without_player_is_ignored(basic_config) -> None:
    assert not GameEngine(basic_config).submit_trade("buy", 1, 0.1)


def test_get_trades_shows_ten_newest(engine) -> None:
    for _ in range(12):
        engine.submit_trade("buy", 1, 0.12)
    trades = engine.get_trades()
    assert len(trades) == 10
    assert trades[0].trade_id == 12


def test_select_unknown_participant_type(engine, basic_config) -> None:
    assert not engine.select_participant_type("nuclear")
    assert engine.get_player().participant_type.key == "residential"
    assert not GameEngine(basic_config).select_participant_type("residential")


def test_start_and_advance_ticks_hourly(engine, recorder) -> None:
    started = recorder(engine, Topics.GAME_STARTED)
    updates = recorder(engine, Topics.GAME_STATE_UPDATED)

    engine.start()
    engine.advance(1000)
    assert engine.state.hour == 7
    engine.advance(3500)

    assert len(started) == 1
    assert engine.state.hour == 10
    assert len(updates) == 4
    assert updates[-1] is engine.get_game_state()


def test_pause_stops_hours_but_not_timer(engine, recorder) -> None:
    paused = recorder(engine, Topics.GAME_PAUSED)
    engine.start()
    engine.advance(1000)

    assert engine.pause()
    engine.advance(5000)
    assert engine.state.hour == 7
    assert engine.scheduler.pending() == 1

    engine.resume()
    engine.advance(1000)
    assert engine.state.hour == 8
    assert paused == [True, False]


def test_stop_clears_timer(engine, recorder) -> None:
    stopped = recorder(engine, Topics.GAME_STOPPED)
    engine.start()
    engine.advance(2000)
    engine.stop()
    engine.advance(5000)

    assert engine.state.hour == 8
    assert not engine.state.is_running
    assert stopped == [None]
    assert engine.scheduler.pending() == 0


def test_manual_tick_without_timer(engine) -> None:
    outcome = engine.tick()
    assert (outcome.day, outcome.hour) == (1, 7)
    assert len(engine.model.tick_results) == 1


def test_full_headless_run(engine, recorder) -> None:
    ended = recorder(engine, Topics.GAME_ENDED)
    days = recorder(engine, Topics.NEW_DAY)
    order = []
    engine.on(Topics.GAME_STOPPED, lambda _: order.append("stopped"))
    engine.on(Topics.GAME_ENDED, lambda _: order.append("ended"))

    run = engine.run_headless()

    assert len(run.ticks) == FULL_RUN_TICKS
    assert days == [2, 3, 4, 5, 6, 7, 8]
    assert len(ended) == 1
    assert order == ["stopped", "ended"]
    assert run.report == engine.final_report == ended[0]
    assert run.report.days_played == 7
    assert not engine.state.is_running
    assert engine.state.is_finished

    assert engine.tick() is None
    engine.start()
    assert not engine.state.is_running


def test_headless_run_with_tick_limit(engine) -> None:
    run = engine.run_headless(max_ticks=5)
    assert len(run.ticks) == 5
    assert run.report is None
    assert not engine.state.is_running
    assert [t.step for t in run.ticks] == [1, 2, 3, 4, 5]


def test_seeded_runs_are_reproducible(game_config_factory) -> None:
    config = game_config_factory(seed=11)
    prices = []
    for _ in range(2):
        engine = GameEngine.from_config(config)
        run = engine.run_headless(max_ticks=48)
        prices.append([t.market.price for t in run.ticks])
    assert prices[0] == prices[1]


def test_automation_rules_via_engine(engine, recorder) -> None:
    added = recorder(engine, Topics.AUTOMATION_RULE_ADDED)
    toggled = recorder(engine, Topics.AUTOMATION_RULE_TOGGLED)

    rule = engine.add_automation_rule("auto_sell", 0.15)
    assert added == [rule]

    assert engine.toggle_automation_rule(rule.rule_id, False)
    assert toggled == [{"rule_id": rule.rule_id, "enabled": False}]
    assert not rule.enabled

    assert not engine.toggle_automation_rule(42, True)
    assert len(toggled) == 1


def test_from_config_installs_scenario(game_config_factory) -> None:
    config = game_config_factory(
        player_name="GridCoop",
        participant_type="community",
        automation=[
            AutomationRuleConfig(kind="auto_sell", price_threshold=0.2),
            AutomationRuleConfig(kind="auto_buy", price_threshold=0.08, enabled=False),
        ],
    )
    engine = GameEngine.from_config(config)

    player = engine.get_player()
    assert player.name == "GridCoop"
    assert player.cash == 2000.0
    rules = engine.state.automation.rules
    assert [(r.kind, r.enabled) for r in rules] == [
        ("auto_sell", True),
        ("auto_buy", False),
    ]
    assert not engine.network.is_connected


def test_from_config_rejects_unknown_type(game_config_factory) -> None:
    with pytest.raises(ValueError):
        GameEngine.from_config(game_config_factory(participant_type="nuclear"))


def test_leaderboard_accessor(engine) -> None:
    assert engine.get_leaderboard() == []
    engine.tick()
    board = engine.get_leaderboard()
    assert len(board) == 6
    assert board[-1].name == "Tester"


def test_failing_subscriber_does_not_break_tick(engine) -> None:
    def broken(_):
        raise RuntimeError("ui crashed")

    engine.on(Topics.GAME_STATE_UPDATED, broken)
    engine.start()
    engine.advance(3000)
    assert engine.state.hour == 9


def test_play_loop_runs_to_completion(game_config_factory) -> None:
    config = game_config_factory(clock=ClockConfig(start_day=7, start_hour=20))
    engine = GameEngine.from_config(config)
    engine.start()

    asyncio.run(engine.play_loop(speed=1000))

    assert engine.state.is_finished
    assert engine.final_report is not None


def test_play_loop_requires_running_engine(engine) -> None:
    asyncio.run(engine.play_loop())
    assert engine.state.hour == 6
