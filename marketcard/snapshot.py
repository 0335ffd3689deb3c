"""marketcard.snapshot

Snapshot assembly.

"The conductor does not play the instruments."

Pipeline:
1) global metrics, quotes and sentiment, concurrently
2) alt-season score from dominance
3) narrative (depends on 1 and 2)
4) one immutable MarketSnapshot

Only market-data failures are fatal. Sentiment and narrative degrade to a neutral
score and no text.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime

from pydantic import ValidationError

from marketcard.core.client import ClientConfig, DataClient
from marketcard.core.config import Config
from marketcard.core.exceptions import UpstreamError
from marketcard.core.models import MarketSnapshot
from marketcard.core.scoring import alt_season_score
from marketcard.core.time import card_date, utc_now
from marketcard.narrative.composer import NarrativeComposer
from marketcard.narrative.prompt import AnalysisInput
from marketcard.sources.coinmarketcap import CoinMarketCapClient
from marketcard.sources.sentiment import SentimentFetcher

logger = logging.getLogger(__name__)


class SnapshotAssembler:
    def __init__(
        self,
        config: Config,
        client: DataClient,
        *,
        market: CoinMarketCapClient | None = None,
        sentiment: SentimentFetcher | None = None,
        composer: NarrativeComposer | None = None,
    ) -> None:
        self.config = config
        self.market = market or CoinMarketCapClient(config.coinmarketcap, client)
        self.sentiment = sentiment or SentimentFetcher(config.sentiment, client)
        self.composer = composer or NarrativeComposer(config.analysis, client)

    async def assemble(self, now: datetime | None = None) -> MarketSnapshot:
        now = now or utc_now()
        symbols = list(self.config.universe.symbols)
        start = time.perf_counter()

        # First fatal failure cancels the sibling fetches before the client goes away.
        failure: UpstreamError | None = None
        try:
            async with asyncio.TaskGroup() as tg:
                metrics_task = tg.create_task(self.market.global_metrics())
                quotes_task = tg.create_task(self.market.quotes(symbols))
                sentiment_task = tg.create_task(self.sentiment.fetch(now))
        except* UpstreamError as eg:
            failure = eg.exceptions[0]
        if failure is not None:
            raise failure

        global_metrics = metrics_task.result()
        coins = quotes_task.result()
        fear_greed = sentiment_task.result()
        if len(coins) != len(symbols):
            raise UpstreamError(f"expected {len(symbols)} quotes, got {len(coins)}")

        alt_season = alt_season_score(global_metrics.btc_dom, global_metrics.eth_dom)
        date = card_date(now)

        figures = AnalysisInput(
            date=date,
            fear_greed=fear_greed,
            alt_season=alt_season,
            total_market_cap=global_metrics.total_market_cap,
            market_cap_change_pct=global_metrics.market_cap_change_pct,
            volume_24h=global_metrics.volume_24h,
            volume_change_pct=global_metrics.volume_change_pct,
            btc_dom=global_metrics.btc_dom,
            eth_dom=global_metrics.eth_dom,
            coins=tuple(coins),
        )
        ai_analysis = await self.composer.analyze(figures)

        try:
            snapshot = MarketSnapshot(
                date=date,
                fear_greed=fear_greed,
                alt_season=alt_season,
                total_market_cap=global_metrics.total_market_cap,
                market_cap_change_pct=global_metrics.market_cap_change_pct,
                volume_24h=global_metrics.volume_24h,
                volume_change_pct=global_metrics.volume_change_pct,
                btc_dom=global_metrics.btc_dom,
                eth_dom=global_metrics.eth_dom,
                coins=tuple(coins),
                ai_analysis=ai_analysis,
            )
        except ValidationError as e:
            raise UpstreamError(f"market data failed validation: {e.error_count()} error(s)") from e

        logger.info(
            "snapshot_assembled",
            extra={
                "duration_ms": int((time.perf_counter() - start) * 1000),
                "fear_greed": fear_greed,
                "alt_season": alt_season,
                "has_analysis": ai_analysis is not None,
            },
        )
        return snapshot


async def assemble_snapshot(config: Config, *, now: datetime | None = None) -> MarketSnapshot:
    """One-shot helper that owns its HTTP client."""

    async with DataClient(ClientConfig.from_http(config.http)) as client:
        return await SnapshotAssembler(config, client).assemble(now)
