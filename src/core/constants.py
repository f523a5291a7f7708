"""
Core constants and limits.

Defines simulation-wide defaults and numeric guards shared by the market,
order and portfolio engines.
"""

# Market Defaults
DEFAULT_MAX_HISTORY_LENGTH = 100  # Price points kept per ticker
DEFAULT_TRANSACTION_FEE = 1.0  # Flat fee per executed trade, in dollars
DEFAULT_SPREAD_PERCENT = 0.005  # 0.5% bid-ask spread

# Price Generator Defaults
DEFAULT_RANDOM_WALK_WEIGHT = 0.4
DEFAULT_MOMENTUM_WEIGHT = 0.25
DEFAULT_NEWS_WEIGHT = 0.25
DEFAULT_VOLUME_WEIGHT = 0.1
DEFAULT_MOMENTUM_DECAY = 0.8

# Price Guards
MIN_PRICE = 0.01  # Prices never fall below one cent
MAX_CHANGE_VOLATILITY_MULTIPLE = 3.0  # Per-tick move capped at 3x volatility
MOMENTUM_LOOKBACK_DECAY = 0.7  # Weight decay per step back in momentum
INITIAL_HISTORY_WINDOW = 5  # Prices fed to the generator during warm-up

# Order Defaults
DEFAULT_EXPIRATION_TURNS = 2
ALL_TICKERS = "all"  # Market-wide event target

# Portfolio Defaults
DEFAULT_STARTING_CASH = 10000.0
DEFAULT_CONCENTRATION_LIMIT = 0.5  # 50% of total value in one ticker
UNKNOWN_SECTOR = "unknown"

# Asset Limits
MIN_RISK_RATING = 1
MAX_RISK_RATING = 4

# Session Limits
MAX_PORTFOLIO_SNAPSHOTS = 5000  # Maximum portfolio snapshots to keep
