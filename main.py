"""Entry point for the Energy Trading Simulator."""

import logging

from energy_trading_sim.core.constants import Topics
from energy_trading_sim.schemas import GameConfig
from energy_trading_sim.services import GameEngine
from energy_trading_sim.services.config_manager import describe_scenarios, load_scenario
from energy_trading_sim.services.export import export_run_to_csv
from energy_trading_sim.services.metrics import summarize_prices


def run_scenario(config: GameConfig) -> None:
    """Run a single scenario headlessly and print its results.

    Args:
        config: Validated scenario configuration.
    """
    print(f"--- Running {config.name}: {config.description} ---")
    engine = GameEngine.from_config(config)

    errors: list[str] = []
    engine.on(Topics.TRADE_ERROR, errors.append)
    engine.on(Topics.NEW_DAY, lambda day: print(f"  Day {day}"))

    run = engine.run_headless()
    prices = summarize_prices(run.ticks)

    print(f"Results for {config.name}:")
    if run.report is not None:
        print(f"  Total Profit:   ${run.report.total_profit:.2f}")
        print(f"  Trades:         {run.report.total_trades}")
        print(f"  Final Rank:     {run.report.final_rank}")
        print(f"  Days Played:    {run.report.days_played}")
    print(f"  Mean Price:     ${prices['mean_price']:.3f}/kWh")
    print(f"  Rejected Trades: {len(errors)}")
    print(f"  Exported to:    {export_run_to_csv(run)}")
    print("\n")


def main() -> None:
    """Load scenarios and run them."""
    logging.basicConfig(level=logging.WARNING)

    scenarios = describe_scenarios()
    if not scenarios:
        print("No scenario config found; running defaults.")
        run_scenario(GameConfig(name="Default"))
        return

    print(f"Found {len(scenarios)} scenarios:")
    for row in scenarios:
        print(f"  {row['file']:<28} {row['participant_type']:<12} rules={row['rules']}")
    print()

    for row in scenarios:
        run_scenario(load_scenario(row["file"]))


if __name__ == "__main__":
    main()
