"""Tests for leaderboard ranking."""

from energy_trading_sim.core.leaderboard import build_leaderboard, rank_of


def test_new_player_ranks_last(player_factory) -> None:
    board = build_leaderboard(player_factory())
    assert [entry.rank for entry in board] == [1, 2, 3, 4, 5, 6]
    assert board[0].name == "GreenFactory"
    assert board[-1].name == "Tester"
    assert rank_of(board, "Tester") == 6


def test_profitable_player_ranks_first(player_factory) -> None:
    board = build_leaderboard(player_factory(total_profit=3000.0, trade_count=9))
    assert board[0].name == "Tester"
    assert board[0].trades == 9
    assert board[0].participant_type == "residential"


def test_tie_keeps_player_ahead(player_factory) -> None:
    board = build_leaderboard(player_factory(total_profit=2100.0))
    assert rank_of(board, "Tester") == 1
    assert rank_of(board, "GreenFactory") == 2


def test_profits_are_descending(player_factory) -> None:
    board = build_leaderboard(player_factory(total_profit=1000.0))
    profits = [entry.profit for entry in board]
    assert profits == sorted(profits, reverse=True)


def test_without_player_uses_placeholder() -> None:
    board = build_leaderboard(None)
    assert rank_of(board, "Demo User") == 6
    assert rank_of(board, "Nobody") == 0
