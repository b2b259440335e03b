"""Data collection logic for the simulation."""

import mesa

from energy_trading_sim.core.constants import ColumnNames


def _state(model: mesa.Model):
    from energy_trading_sim.services.model_wrapper import EnergyTradingModel

    if isinstance(model, EnergyTradingModel):
        return model.state
    return None


def compute_current_price(model: mesa.Model) -> float:
    """Get the current market price.

    Args:
        model: The Mesa model instance.

    Returns:
        float: Current price ($/kWh).
    """
    state = _state(model)
    return state.market.current_price if state else 0.0


def compute_supply(model: mesa.Model) -> float:
    state = _state(model)
    return state.market.supply if state else 0.0


def compute_demand(model: mesa.Model) -> float:
    state = _state(model)
    return state.market.demand if state else 0.0


def compute_volume(model: mesa.Model) -> float:
    state = _state(model)
    return state.market.volume if state else 0.0


def compute_weather(model: mesa.Model) -> str:
    state = _state(model)
    return state.market.weather if state else ""


def _player_attr(model: mesa.Model, attr: str) -> float:
    state = _state(model)
    if state is None or state.player is None:
        return 0.0
    return getattr(state.player, attr)


MODEL_REPORTERS = {
    ColumnNames.PRICE: compute_current_price,
    ColumnNames.SUPPLY: compute_supply,
    ColumnNames.DEMAND: compute_demand,
    ColumnNames.VOLUME: compute_volume,
    ColumnNames.WEATHER: compute_weather,
    ColumnNames.CASH: lambda m: _player_attr(m, "cash"),
    ColumnNames.ENERGY: lambda m: _player_attr(m, "energy_balance"),
    ColumnNames.BATTERY: lambda m: _player_attr(m, "battery_level"),
    ColumnNames.TOTAL_PROFIT: lambda m: _player_attr(m, "total_profit"),
}
