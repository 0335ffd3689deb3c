"""Test doubles for the shared HTTP client and canned provider payloads."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx


def make_response(status: int = 200, *, url: str = "https://example.test/", **kwargs: Any) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", url), **kwargs)


class RoutedClient:
    """Stands in for DataClient: URL fragment -> response or exception."""

    def __init__(self, routes: dict[str, httpx.Response | Exception]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    async def request(self, method: str, url: str, *, check_status: bool = True, **kwargs: Any) -> httpx.Response:
        self.calls.append((method, url, kwargs))
        for fragment, outcome in self.routes.items():
            if fragment in url:
                if isinstance(outcome, Exception):
                    raise outcome
                if check_status:
                    outcome.raise_for_status()
                return outcome
        raise httpx.ConnectError("no route", request=httpx.Request(method, url))

    async def request_json(self, method: str, url: str, *, expected: Any = None, **kwargs: Any) -> Any:
        resp = await self.request(method, url, **kwargs)
        return resp.json()

    def calls_to(self, fragment: str) -> list[tuple[str, str, dict[str, Any]]]:
        return [c for c in self.calls if fragment in c[1]]


class SlowClient(RoutedClient):
    def __init__(self, delay_s: float) -> None:
        super().__init__({})
        self.delay_s = delay_s

    async def request(self, method: str, url: str, *, check_status: bool = True, **kwargs: Any) -> httpx.Response:
        self.calls.append((method, url, kwargs))
        await asyncio.sleep(self.delay_s)
        return make_response(200, json={"analysis": "too late"})


def global_metrics_payload(
    *,
    btc_dom: float = 55.0,
    eth_dom: float = 12.0,
    cap: float = 2.5e12,
    cap_change: float | None = 1.5,
    volume: float = 9.87e10,
    volume_change: float | None = -3.4,
) -> dict[str, Any]:
    usd: dict[str, Any] = {"total_market_cap": cap, "total_volume_24h": volume}
    if cap_change is not None:
        usd["total_market_cap_yesterday_percentage_change"] = cap_change
    if volume_change is not None:
        usd["total_volume_24h_yesterday_percentage_change"] = volume_change
    return {
        "status": {"error_code": 0, "error_message": None},
        "data": {"btc_dominance": btc_dom, "eth_dominance": eth_dom, "quote": {"USD": usd}},
    }


COIN_NAMES = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "BNB": "BNB",
    "XRP": "XRP",
    "SOL": "Solana",
    "TRX": "TRON",
    "DOGE": "Dogecoin",
    "ADA": "Cardano",
}


def quotes_payload(symbols: list[str] | None = None) -> dict[str, Any]:
    syms = symbols or list(COIN_NAMES)
    data: dict[str, Any] = {}
    for i, sym in enumerate(syms):
        data[sym] = {
            "name": COIN_NAMES.get(sym, sym.title()),
            "symbol": sym,
            "quote": {"USD": {"price": 1000.0 * (i + 1), "percent_change_24h": 2.0 - i}},
        }
    return {"status": {"error_code": 0}, "data": data}


def cmc_error_payload(code: int = 1002, message: str | None = "API key missing.") -> dict[str, Any]:
    return {"status": {"error_code": code, "error_message": message}}
