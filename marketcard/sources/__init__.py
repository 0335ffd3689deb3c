"""marketcard.sources

Upstream data sources. Each source owns one provider's quirks and returns
internal types only.
"""

from .coinmarketcap import CoinMarketCapClient
from .sentiment import SentimentFetcher

__all__ = ["CoinMarketCapClient", "SentimentFetcher"]
