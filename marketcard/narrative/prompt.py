"""marketcard.narrative.prompt

Deterministic plain-text summary of the market figures, sent to the analysis
endpoint. The layout mirrors the card: sentiment line, cap and volume lines, then
three lines per coin.

Precisions are fixed per figure and must not drift:
- market cap: trillions, 2 decimals; change 1 decimal
- volume: billions, 1 decimal; change 0 decimals
- coin change: 2 decimals
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from marketcard.core.models import CoinQuote, MarketSnapshot
from marketcard.core.scoring import round_half_up


@dataclass(frozen=True, slots=True)
class AnalysisInput:
    """Snapshot figures without the narrative itself."""

    date: str
    fear_greed: float
    alt_season: int
    total_market_cap: float
    market_cap_change_pct: float
    volume_24h: float
    volume_change_pct: float
    btc_dom: float
    eth_dom: float
    coins: Sequence[CoinQuote]

    @classmethod
    def from_snapshot(cls, snapshot: MarketSnapshot) -> AnalysisInput:
        return cls(
            date=snapshot.date,
            fear_greed=snapshot.fear_greed,
            alt_season=snapshot.alt_season,
            total_market_cap=snapshot.total_market_cap,
            market_cap_change_pct=snapshot.market_cap_change_pct,
            volume_24h=snapshot.volume_24h,
            volume_change_pct=snapshot.volume_change_pct,
            btc_dom=snapshot.btc_dom,
            eth_dom=snapshot.eth_dom,
            coins=snapshot.coins,
        )


def _quantize(n: float, digits: int) -> Decimal:
    # Exact binary value, halves away from zero. -0.0 prints as 0.
    exact = Decimal(n + 0.0)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        return exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def to_fixed(n: float, digits: int) -> str:
    return str(_quantize(n, digits))


def fmt_sign(n: float) -> str:
    """``+`` for strictly positive numbers only. Negatives carry their own minus."""

    return "+" if n > 0 else ""


def format_price(n: float) -> str:
    if n >= 1000:
        digits = 0
    elif n >= 1:
        digits = 2
    else:
        digits = 6
    return f"{_quantize(n, digits):,.{digits}f}"


def format_pct(fraction: float, digits: int) -> str:
    """Signed percent from a fraction: ``0.0123`` -> ``+1.23%``."""

    return f"{fmt_sign(fraction)}{to_fixed(fraction * 100, digits)}%"


def build_prompt_text(data: AnalysisInput, *, max_coins: int = 8) -> str:
    lines: list[str] = []
    lines.append(
        f"Fear Greed {round_half_up(data.fear_greed)} / 100,  Alt Season {round_half_up(data.alt_season)}/100"
    )

    cap_t = f"${to_fixed(data.total_market_cap / 1e12, 2)}T"
    vol_b = f"{to_fixed(data.volume_24h / 1e9, 1)}B+"
    lines.append(f"Total Market Cap {cap_t} {format_pct(data.market_cap_change_pct, 1)}")
    lines.append(f"Market Volume 24h {vol_b} {format_pct(data.volume_change_pct, 0)}")

    for coin in list(data.coins)[:max_coins]:
        lines.append(coin.symbol)
        lines.append(coin.name)
        lines.append(f"${format_price(coin.price)} {format_pct(coin.change_pct, 2)}")

    return "\n".join(lines)
