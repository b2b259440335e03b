"""Demo leaderboard: the player ranked against fixed demo traders."""

from energy_trading_sim.core.constants import DEFAULT_LEADERBOARD_NAME, DEMO_LEADERBOARD
from energy_trading_sim.core.participants import Player
from energy_trading_sim.schemas import LeaderboardEntry


def build_leaderboard(
    player: Player | None,
    demo_entries: tuple[dict, ...] = DEMO_LEADERBOARD,
) -> list[LeaderboardEntry]:
    """Rank the player and demo traders by profit, highest first.

    Ties keep the player ahead of demo traders (stable sort).
    """
    rows = [
        {
            "name": player.name if player else DEFAULT_LEADERBOARD_NAME,
            "participant_type": (
                player.participant_type.key
                if player and player.participant_type
                else "residential"
            ),
            "profit": player.total_profit if player else 0.0,
            "trades": player.trade_count if player else 0,
        },
        *demo_entries,
    ]
    rows.sort(key=lambda row: row["profit"], reverse=True)
    return [LeaderboardEntry(rank=i + 1, **row) for i, row in enumerate(rows)]


def rank_of(leaderboard: list[LeaderboardEntry], name: str) -> int:
    """1-based rank of ``name``; 0 when absent."""
    for entry in leaderboard:
        if entry.name == name:
            return entry.rank
    return 0
