from __future__ import annotations

import math

import httpx
import pytest

from marketcard.core.config import SentimentConfig
from marketcard.sources.sentiment import SentimentFetcher, parse_fallback, parse_primary
from tests.unit._fakes import RoutedClient, make_response

PRIMARY = "fear-greed/chart"
FALLBACK = "alternative.me"


def _boom(url: str) -> httpx.ConnectError:
    return httpx.ConnectError("down", request=httpx.Request("GET", url))


def _fetcher(routes: dict) -> tuple[SentimentFetcher, RoutedClient]:
    fake = RoutedClient(routes)
    return SentimentFetcher(SentimentConfig(), fake), fake


def test_parse_primary_rounds_last_point() -> None:
    out = parse_primary({"data": {"points": [{"y": 10}, {"y": 63.7}]}})
    assert out.ok and out.value == 64


@pytest.mark.parametrize(
    "payload",
    [
        {"data": {"values": [{"value": 41.2}]}},
        {"data": {"points": [{"score": "41"}]}},
    ],
)
def test_parse_primary_tolerates_alternate_shapes(payload: dict) -> None:
    assert parse_primary(payload).value == 41


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"data": {}},
        {"data": {"points": []}},
        {"data": {"points": ["x"]}},
        {"data": {"points": [{"y": "NaN"}]}},
        {"data": {"points": [{"y": "abc"}]}},
        {"data": {"points": [{"y": 150}]}},
    ],
)
def test_parse_primary_failures(payload: object) -> None:
    out = parse_primary(payload)
    assert not out.ok
    assert out.error


def test_parse_fallback_is_unrounded() -> None:
    assert parse_fallback({"data": [{"value": "71"}]}).value == 71
    assert isinstance(parse_fallback({"data": [{"value": "71"}]}).value, int)
    assert parse_fallback({"data": [{"value": 70.6}]}).value == 70.6
    assert not parse_fallback({"data": []}).ok


@pytest.mark.anyio
async def test_primary_value_wins(fixed_now) -> None:
    fetcher, fake = _fetcher(
        {
            PRIMARY: make_response(json={"data": {"points": [{"y": 63.7}]}}),
            FALLBACK: make_response(json={"data": [{"value": "20"}]}),
        }
    )
    assert await fetcher.fetch(fixed_now) == 64
    assert fake.calls_to(FALLBACK) == []

    params = fake.calls_to(PRIMARY)[0][2]["params"]
    end = int(fixed_now.timestamp())
    assert params == {"start": str(end - 7 * 24 * 60 * 60), "end": str(end)}


@pytest.mark.anyio
async def test_falls_back_when_primary_unreachable(fixed_now) -> None:
    fetcher, fake = _fetcher(
        {
            PRIMARY: _boom("https://api.coinmarketcap.com"),
            FALLBACK: make_response(json={"data": [{"value": "71"}]}),
        }
    )
    assert await fetcher.fetch(fixed_now) == 71
    assert len(fake.calls_to(FALLBACK)) == 1


@pytest.mark.anyio
async def test_falls_back_when_primary_shape_changes(fixed_now) -> None:
    fetcher, _ = _fetcher(
        {
            PRIMARY: make_response(json={"data": {"dataList": []}}),
            FALLBACK: make_response(json={"data": [{"value": 33}]}),
        }
    )
    assert await fetcher.fetch(fixed_now) == 33


@pytest.mark.anyio
async def test_falls_back_on_primary_http_error(fixed_now) -> None:
    fetcher, _ = _fetcher(
        {
            PRIMARY: make_response(503, text="unavailable"),
            FALLBACK: make_response(json={"data": [{"value": 12}]}),
        }
    )
    assert await fetcher.fetch(fixed_now) == 12


@pytest.mark.anyio
async def test_neutral_when_both_sources_fail(fixed_now, caplog: pytest.LogCaptureFixture) -> None:
    fetcher, _ = _fetcher({PRIMARY: _boom("https://a.test"), FALLBACK: _boom("https://b.test")})
    with caplog.at_level("WARNING"):
        score = await fetcher.fetch(fixed_now)
    assert score == 50
    assert "sentiment_primary_failed" in caplog.text
    assert "sentiment_fallback_failed" in caplog.text


@pytest.mark.anyio
async def test_neutral_when_fallback_not_finite(fixed_now) -> None:
    fetcher, _ = _fetcher(
        {
            PRIMARY: make_response(text="not json"),
            FALLBACK: make_response(json={"data": [{"value": "Infinity"}]}),
        }
    )
    score = await fetcher.fetch(fixed_now)
    assert score == 50
    assert math.isfinite(score)
