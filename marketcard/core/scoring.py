"""marketcard.core.scoring

Derived market scores.

Alt season: share of total market cap outside BTC and ETH, scaled so that a 50%
share is already a full-blown alt season.

  0% outside  -> 0
  25% outside -> 50
  50%+ outside -> 100
"""

from __future__ import annotations

import math


def round_half_up(x: float) -> int:
    """Round to nearest integer, halves toward +inf (66.5 -> 67, -0.5 -> 0)."""

    return int(math.floor(x + 0.5))


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def alt_season_score(btc_dom: float, eth_dom: float) -> int:
    """Alt-season score 0..100 from BTC and ETH dominance percentages.

    A dominance sum above 100 is a data anomaly and clamps to 0.
    """

    ex_btc_eth_share = 100.0 - (float(btc_dom) + float(eth_dom))
    return int(clamp(round_half_up(ex_btc_eth_share * 2), 0, 100))
