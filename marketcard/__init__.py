"""marketcard: market overview card, data side.

Fetches, normalizes and narrates one market snapshot per request. Rendering
consumes the snapshot; nothing here draws pixels.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "DEFAULT_SYMBOLS",
]

__version__ = "1.0.0"

# Card order. Renderers rely on it.
DEFAULT_SYMBOLS = ("BTC", "ETH", "BNB", "XRP", "SOL", "TRX", "DOGE", "ADA")
