"""Services package for game orchestration.

This package contains:
- simulation.py: GameEngine controlling a game run
- model_wrapper.py: Mesa model integration (EnergyTradingModel)
- network.py: Simulated multiplayer network
- config_manager.py: Scenario file loading/saving
- data_collect.py: Mesa data collection functions
- metrics.py / export.py: Run analysis and export
"""

from energy_trading_sim.services.model_wrapper import EnergyTradingModel
from energy_trading_sim.services.network import NetworkSimulator
from energy_trading_sim.services.simulation import GameEngine

__all__ = ["GameEngine", "EnergyTradingModel", "NetworkSimulator"]
