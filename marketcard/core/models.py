"""marketcard.core.models

Core domain models.

The snapshot is immutable. Built once per request, read by renderers, discarded.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CoinQuote(BaseModel):
    symbol: str
    name: str
    price: float
    change_pct: float  # fraction, 0.015 == +1.5%

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class MarketSnapshot(BaseModel):
    """Fully assembled market record handed to renderers."""

    date: str
    fear_greed: int | float = Field(ge=0, le=100)
    alt_season: int = Field(ge=0, le=100)
    total_market_cap: float
    market_cap_change_pct: float
    volume_24h: float
    volume_change_pct: float
    btc_dom: float = Field(ge=0, le=100)
    btc_dom_change_pct: float = 0.0
    eth_dom: float = Field(ge=0, le=100)
    eth_dom_change_pct: float = 0.0
    coins: tuple[CoinQuote, ...]
    ai_analysis: str | None = None

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @property
    def analysis_lines(self) -> list[str]:
        if not self.ai_analysis:
            return []
        return self.ai_analysis.splitlines()
