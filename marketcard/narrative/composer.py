"""marketcard.narrative.composer

Ask the analysis endpoint for a short market narrative.

Contract: ``analyze`` returns formatted text or ``None``. It never raises; a card
without a narrative is still a card.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from marketcard.core.client import DataClient
from marketcard.core.config import AnalysisConfig
from marketcard.core.types import Outcome
from marketcard.narrative.extract import match_shape
from marketcard.narrative.prompt import AnalysisInput, build_prompt_text
from marketcard.narrative.text import format_analysis_text

logger = logging.getLogger(__name__)


def _formatted(text: str | None) -> str | None:
    if text is None or not text.strip():
        return None
    return format_analysis_text(text.strip()) or None


def read_analysis_response(resp: httpx.Response) -> Outcome[str]:
    """Response -> formatted analysis text.

    - error status: the body is often a useful message; keep it if non-empty
    - JSON: first known shape
    - anything else: body text as-is
    """

    body = resp.text
    if not resp.is_success:
        if body.strip():
            logger.error("analysis_http_error", extra={"status": resp.status_code, "body": body[:500]})
        text = _formatted(body)
        return Outcome.success(text) if text else Outcome.failure(f"http_{resp.status_code}_empty")

    content_type = resp.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            payload = resp.json()
        except ValueError:
            return Outcome.failure("invalid_json")
        match = match_shape(payload)
        if match is None:
            return Outcome.failure("unknown_shape")
        logger.debug("analysis_shape", extra={"shape": match.shape})
        text = _formatted(match.text)
        return Outcome.success(text) if text else Outcome.failure("empty_text")

    text = _formatted(body)
    return Outcome.success(text) if text else Outcome.failure("empty_body")


class NarrativeComposer:
    def __init__(self, config: AnalysisConfig, client: DataClient) -> None:
        self.config = config
        self.client = client

    async def _post(self, text: str) -> httpx.Response:
        return await self.client.request("POST", self.config.url, check_status=False, json={"data": text})

    async def request(self, data: AnalysisInput) -> Outcome[str]:
        if not self.config.enabled or not self.config.url:
            return Outcome.failure("disabled")

        try:
            text = build_prompt_text(data, max_coins=self.config.max_coins)
        except (ArithmeticError, ValueError) as e:
            return Outcome.failure(f"prompt_failed: {type(e).__name__}")

        try:
            resp = await asyncio.wait_for(self._post(text), timeout=self.config.timeout_s)
        except TimeoutError:
            return Outcome.failure("timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Outcome.failure(f"{type(e).__name__}: {e}")
        return read_analysis_response(resp)

    async def analyze(self, data: AnalysisInput) -> str | None:
        outcome = await self.request(data)
        if not outcome.ok:
            logger.warning("analysis_unavailable", extra={"reason": outcome.error})
            return None
        return outcome.value
