"""Centralized constants for the Energy Trading Simulator.

This file contains the fixed tables of the game:
- Weather effects and time-of-day patterns
- Random market event templates
- Demo traders (leaderboard and simulated network participants)
- Event bus topic names and DataFrame column names
"""

# --- Weather ---
# Multipliers applied to the solar and wind terms of renewable supply.
WEATHER_EFFECTS: dict[str, dict[str, float]] = {
    "sunny": {"solar": 1.5, "wind": 0.8},
    "cloudy": {"solar": 0.5, "wind": 1.0},
    "windy": {"solar": 1.0, "wind": 2.0},
    "rainy": {"solar": 0.3, "wind": 1.2},
}
WEATHER_TYPES: tuple[str, ...] = tuple(WEATHER_EFFECTS)

# --- Time-of-day patterns ---
PEAK_HOURS = frozenset({14, 15, 16, 17, 18, 19})
OFF_PEAK_HOURS = frozenset({22, 23, 0, 1, 2, 3, 4, 5})
HOURS_PER_DAY = 24

# --- Random market events ---
# Effects are informational; they are recorded and published but not applied.
RANDOM_EVENT_TEMPLATES: tuple[dict, ...] = (
    {
        "event_type": "equipment_failure",
        "title": "Equipment Maintenance",
        "message": "Solar panel efficiency reduced by 20% for 2 hours",
        "effect": {"solar_efficiency": 0.8, "duration": 2},
    },
    {
        "event_type": "grid_congestion",
        "title": "Grid Congestion",
        "message": "High demand causing price spike!",
        "effect": {"price_multiplier": 1.5, "duration": 1},
    },
    {
        "event_type": "renewable_bonus",
        "title": "Renewable Energy Bonus",
        "message": "Government incentive: +$0.02/kWh for renewable sales",
        "effect": {"renewable_bonus": 0.02, "duration": 3},
    },
    {
        "event_type": "market_manipulation",
        "title": "Market Volatility",
        "message": "Unusual trading activity detected",
        "effect": {"price_volatility": 2.0, "duration": 2},
    },
)

# --- Demo traders ---
DEMO_LEADERBOARD: tuple[dict, ...] = (
    {"name": "EcoTrader_42", "participant_type": "commercial", "profit": 1250, "trades": 45},
    {"name": "SolarMom", "participant_type": "residential", "profit": 890, "trades": 32},
    {"name": "GreenFactory", "participant_type": "industrial", "profit": 2100, "trades": 67},
    {"name": "CommunityGrid", "participant_type": "community", "profit": 1560, "trades": 54},
    {"name": "PowerSaver", "participant_type": "residential", "profit": 720, "trades": 28},
)

DEMO_PARTICIPANTS: tuple[dict, ...] = (
    {"participant_id": "demo1", "name": "EcoTrader_42", "participant_type": "commercial", "online": True},
    {"participant_id": "demo2", "name": "SolarMom", "participant_type": "residential", "online": True},
    {"participant_id": "demo3", "name": "GreenFactory", "participant_type": "industrial", "online": False},
    {"participant_id": "demo4", "name": "CommunityGrid", "participant_type": "community", "online": True},
    {"participant_id": "demo5", "name": "PowerSaver", "participant_type": "residential", "online": True},
)

VISIBLE_TRADES = 10
DEFAULT_LEADERBOARD_NAME = "Demo User"


# --- Event bus topics ---
class Topics:
    """Names of the topics published on the event bus."""

    GAME_STARTED = "game_started"
    GAME_PAUSED = "game_paused"
    GAME_STOPPED = "game_stopped"
    GAME_STATE_UPDATED = "game_state_updated"
    GAME_ENDED = "game_ended"
    PLAYER_UPDATED = "player_updated"
    PLAYER_ENERGY_UPDATED = "player_energy_updated"
    TRADE_EXECUTED = "trade_executed"
    TRADE_ERROR = "trade_error"
    WEATHER_CHANGED = "weather_changed"
    RANDOM_EVENT = "random_event"
    NEW_DAY = "new_day"
    AUTOMATION_RULE_ADDED = "automation_rule_added"
    AUTOMATION_RULE_TOGGLED = "automation_rule_toggled"
    NETWORK_TRADE_EXECUTED = "network_trade_executed"
    NETWORK_TRADE_CONFIRMED = "network_trade_confirmed"


# --- Dataframe Column Names (Strong Typing) ---
class ColumnNames:
    """Strongly typed column names for model-vars and ledger DataFrames."""

    PRICE = "Price"
    SUPPLY = "Supply"
    DEMAND = "Demand"
    VOLUME = "Volume"
    WEATHER = "Weather"
    CASH = "Cash"
    ENERGY = "Energy"
    BATTERY = "Battery"
    TOTAL_PROFIT = "Total_Profit"
