"""marketcard.sources.coinmarketcap

Market-data provider client.

Two calls per snapshot:
- global metrics (total cap, volume, dominance)
- latest quotes for the card's symbols

Provider percentages are whole numbers (1.5 == 1.5%). Internally every change is
a fraction (0.015), so both mappings divide by 100.

Any failure here is fatal to the snapshot and surfaces as :class:`UpstreamError`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

import httpx

from marketcard.core.client import DataClient
from marketcard.core.config import CoinMarketCapConfig
from marketcard.core.exceptions import UpstreamError
from marketcard.core.models import CoinQuote
from marketcard.core.types import GlobalMetrics

logger = logging.getLogger(__name__)

GLOBAL_METRICS_PATH = "/v1/global-metrics/quotes/latest"
QUOTES_PATH = "/v1/cryptocurrency/quotes/latest"


def _num(value: Any) -> float:
    """Provider number -> finite float. Missing or garbage becomes 0."""

    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0.0
    return f if math.isfinite(f) else 0.0


def _dig(obj: Any, *keys: str) -> Any:
    for k in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(k)
    return obj


def _check_status(payload: Any, *, what: str) -> dict[str, Any]:
    """Validate the provider envelope and return its ``data`` mapping."""

    if not isinstance(payload, dict):
        raise UpstreamError(f"{what}: unexpected response shape")

    status = payload.get("status") or {}
    code = status.get("error_code", 0) if isinstance(status, dict) else 0
    if code not in (0, "0", None):
        message = status.get("error_message") if isinstance(status, dict) else None
        raise UpstreamError(str(message) if message else f"{what} error")

    data = payload.get("data")
    if not isinstance(data, dict):
        raise UpstreamError(f"{what}: missing data")
    return data


def parse_global_metrics(payload: Any) -> GlobalMetrics:
    data = _check_status(payload, what="CMC global metrics")
    usd = _dig(data, "quote", "USD") or {}
    return GlobalMetrics(
        total_market_cap=_num(usd.get("total_market_cap")),
        market_cap_change_pct=_num(usd.get("total_market_cap_yesterday_percentage_change")) / 100,
        volume_24h=_num(usd.get("total_volume_24h")),
        volume_change_pct=_num(usd.get("total_volume_24h_yesterday_percentage_change")) / 100,
        btc_dom=_num(data.get("btc_dominance")),
        eth_dom=_num(data.get("eth_dominance")),
    )


def parse_quotes(payload: Any, symbols: Sequence[str]) -> list[CoinQuote]:
    """Map each requested symbol, in order. A missing symbol fails the whole batch."""

    data = _check_status(payload, what="CMC quotes")
    out: list[CoinQuote] = []
    for sym in symbols:
        item = data.get(sym)
        # Some API versions return a list of same-symbol listings.
        if isinstance(item, list):
            item = item[0] if item else None
        if not isinstance(item, dict):
            raise UpstreamError(f"CMC quotes: symbol {sym} missing from response")
        usd = _dig(item, "quote", "USD") or {}
        out.append(
            CoinQuote(
                symbol=sym,
                name=str(item.get("name") or sym),
                price=_num(usd.get("price")),
                change_pct=_num(usd.get("percent_change_24h")) / 100,
            )
        )
    return out


class CoinMarketCapClient:
    """Provider calls, authenticated with a static API key header."""

    def __init__(self, config: CoinMarketCapConfig, client: DataClient) -> None:
        self.config = config
        self.client = client
        if not config.api_key:
            logger.warning("cmc_api_key_missing")

    def _headers(self) -> dict[str, str]:
        return {
            "X-CMC_PRO_API_KEY": self.config.api_key,
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}{path}"

    async def _get(self, path: str, *, what: str, params: dict[str, str] | None = None) -> Any:
        try:
            return await self.client.request_json("GET", self._url(path), headers=self._headers(), params=params)
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"{what} HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"{what} transport error: {type(e).__name__}") from e
        except ValueError as e:
            raise UpstreamError(f"{what}: response is not JSON") from e

    async def global_metrics(self) -> GlobalMetrics:
        payload = await self._get(GLOBAL_METRICS_PATH, what="CMC global metrics")
        metrics = parse_global_metrics(payload)
        logger.debug("cmc_global_metrics", extra={"btc_dom": metrics.btc_dom, "eth_dom": metrics.eth_dom})
        return metrics

    async def quotes(self, symbols: Sequence[str]) -> list[CoinQuote]:
        syms = [s.upper().strip() for s in symbols]
        payload = await self._get(QUOTES_PATH, what="CMC quotes", params={"symbol": ",".join(syms)})
        return parse_quotes(payload, syms)
