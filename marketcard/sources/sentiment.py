"""marketcard.sources.sentiment

Fear/greed sentiment, best effort.

Chain:
1) primary time series (last point of a 7-day window), rounded
2) single-value fallback, as reported
3) neutral default

Never raises. Sentiment is decoration on the card, not a reason to fail it.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any

import httpx

from marketcard.core.client import DataClient
from marketcard.core.config import SentimentConfig
from marketcard.core.scoring import round_half_up
from marketcard.core.time import unix_window, utc_now
from marketcard.core.types import Outcome

logger = logging.getLogger(__name__)

_POINT_KEYS = ("y", "value", "score")


def _score(value: Any) -> Outcome[float]:
    try:
        v = float(value)
    except (TypeError, ValueError):
        return Outcome.failure(f"not_a_number:{value!r}")
    if not math.isfinite(v):
        return Outcome.failure("non_finite")
    if not 0 <= v <= 100:
        return Outcome.failure(f"out_of_range:{v}")
    return Outcome.success(v)


def parse_primary(payload: Any) -> Outcome[int]:
    """``data.points[-1]`` (or ``data.values[-1]``) -> ``y``/``value``/``score``, rounded."""

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return Outcome.failure("missing_data")

    points = data.get("points") or data.get("values") or []
    if not isinstance(points, list) or not points:
        return Outcome.failure("no_points")

    latest = points[-1]
    if not isinstance(latest, dict):
        return Outcome.failure("point_not_object")

    raw = next((latest[k] for k in _POINT_KEYS if latest.get(k) is not None), None)
    score = _score(raw)
    if not score.ok or score.value is None:
        return Outcome.failure(score.error or "no_value")
    return Outcome.success(round_half_up(score.value))


def parse_fallback(payload: Any) -> Outcome[int | float]:
    """``data[0].value``, unrounded."""

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return Outcome.failure("missing_data")

    score = _score(data[0].get("value"))
    if not score.ok or score.value is None:
        return Outcome.failure(score.error or "no_value")
    v = score.value
    return Outcome.success(int(v) if v.is_integer() else v)


class SentimentFetcher:
    def __init__(self, config: SentimentConfig, client: DataClient) -> None:
        self.config = config
        self.client = client

    async def _get_json(self, url: str, **kwargs: Any) -> Outcome[Any]:
        try:
            data = await self.client.request_json("GET", url, headers={"Accept": "application/json"}, **kwargs)
        except httpx.HTTPStatusError as e:
            return Outcome.failure(f"http_{e.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Outcome.failure(f"{type(e).__name__}: {e}")
        except ValueError:
            return Outcome.failure("not_json")
        return Outcome.success(data)

    async def primary(self, now: datetime | None = None) -> Outcome[int]:
        start, end = unix_window(now or utc_now(), days=self.config.window_days)
        resp = await self._get_json(self.config.primary_url, params={"start": str(start), "end": str(end)})
        if not resp.ok:
            return Outcome.failure(resp.error or "request_failed")
        return parse_primary(resp.value)

    async def fallback(self) -> Outcome[int | float]:
        resp = await self._get_json(self.config.fallback_url)
        if not resp.ok:
            return Outcome.failure(resp.error or "request_failed")
        return parse_fallback(resp.value)

    async def fetch(self, now: datetime | None = None) -> int | float:
        """Fear/greed 0..100. Sequential chain, one attempt per source."""

        first = await self.primary(now)
        if first.ok and first.value is not None:
            return first.value
        logger.warning("sentiment_primary_failed", extra={"reason": first.error})

        second = await self.fallback()
        if second.ok and second.value is not None:
            return second.value
        logger.warning("sentiment_fallback_failed", extra={"reason": second.error})

        return self.config.neutral_default
