"""marketcard.core.exceptions

Errors are part of the interface.

Only upstream market data is allowed to fail a snapshot. Everything else degrades.
"""

from __future__ import annotations


class MarketCardError(Exception):
    """Base exception for marketcard."""


class ConfigError(MarketCardError):
    """Configuration is missing, invalid, or inconsistent."""


class UpstreamError(MarketCardError):
    """Market-data provider failed: transport, HTTP status, or provider error code.

    Fatal to snapshot assembly.
    """
