"""Default parameter values for the Energy Trading Simulator.

These constants are used as `Field(default=...)` values in the Pydantic
config schemas.  They live here (in the schemas layer) rather than in
`core/constants.py` so that `schemas` does not depend on `core`.

All prices are in USD per kWh, all energy quantities in kWh and all
timer intervals in simulated milliseconds.
"""

# =============================================================================
# MARKET
# =============================================================================
DEFAULT_BASE_PRICE = 0.12
DEFAULT_PRICE_FLOOR = 0.05
DEFAULT_PRICE_CEILING = 0.50
DEFAULT_PEAK_MULTIPLIER = 2.5
DEFAULT_OFF_PEAK_MULTIPLIER = 0.6
DEFAULT_PRICE_NOISE = 0.1  # price *= U[1 - noise, 1 + noise]
DEFAULT_HISTORY_LENGTH = 24

# Supply = solar_capacity * solar + wind_capacity * wind + grid_baseline
DEFAULT_SOLAR_CAPACITY = 800.0
DEFAULT_WIND_CAPACITY = 400.0
DEFAULT_GRID_BASELINE = 500.0

# Demand = base_demand * time factor + participant consumption
DEFAULT_BASE_DEMAND = 1000.0
DEFAULT_PEAK_DEMAND_FACTOR = 1.8
DEFAULT_OFF_PEAK_DEMAND_FACTOR = 0.6

DEFAULT_WEATHER_CHANGE_PROB = 0.1
DEFAULT_INITIAL_WEATHER = "sunny"

# Opening book before the first tick
DEFAULT_INITIAL_SUPPLY = 1250.0
DEFAULT_INITIAL_DEMAND = 1180.0
DEFAULT_INITIAL_VOLUME = 340.0

# =============================================================================
# CLOCK
# =============================================================================
DEFAULT_START_DAY = 1
DEFAULT_START_HOUR = 6
DEFAULT_MAX_DAYS = 7
DEFAULT_TICK_INTERVAL_MS = 1000  # one simulated hour per second

# =============================================================================
# EVENTS
# =============================================================================
DEFAULT_RANDOM_EVENT_PROB = 0.05
DEFAULT_EVENT_RETENTION_DAYS = 1  # keep today's and yesterday's events

# =============================================================================
# SIMULATED NETWORK
# =============================================================================
DEFAULT_NETWORK_ENABLED = False
DEFAULT_PRESENCE_INTERVAL_MS = 10_000
DEFAULT_PRESENCE_TOGGLE_PROB = 0.1
DEFAULT_TRADE_INTERVAL_MS = 5_000
DEFAULT_TRADE_PROB = 0.3
DEFAULT_TRADE_AMOUNT_MIN = 10
DEFAULT_TRADE_AMOUNT_MAX = 59
DEFAULT_TRADE_PRICE_SPREAD = 0.05  # +/-5% of market price
DEFAULT_TRADE_AUTOMATED_PROB = 0.4
DEFAULT_JITTER_INTERVAL_MS = 2_000
DEFAULT_JITTER_PRICE = 0.005
DEFAULT_JITTER_SUPPLY = 50
DEFAULT_JITTER_DEMAND = 40
DEFAULT_SUPPLY_FLOOR = 500.0
DEFAULT_DEMAND_FLOOR = 400.0
DEFAULT_CONFIRM_LATENCY_MIN_MS = 100
DEFAULT_CONFIRM_LATENCY_MAX_MS = 300

# =============================================================================
# SCENARIO
# =============================================================================
DEFAULT_PLAYER_NAME = "Demo User"
DEFAULT_PARTICIPANT_TYPE = "residential"
