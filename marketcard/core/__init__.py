"""marketcard.core

Core primitives.

If a module needs to exist, it should probably depend only on this package.
"""

from .config import Config
from .exceptions import MarketCardError, UpstreamError
from .models import CoinQuote, MarketSnapshot
from .time import card_date, utc_now
from .types import GlobalMetrics, Outcome

__all__ = [
    "CoinQuote",
    "Config",
    "GlobalMetrics",
    "MarketCardError",
    "MarketSnapshot",
    "Outcome",
    "UpstreamError",
    "card_date",
    "utc_now",
]
