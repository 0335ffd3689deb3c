"""Market overview card as HTML.

The page is what a headless browser screenshots; the ``#card`` element is the
image boundary.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from api.deps import get_assembler, get_config
from marketcard.core.config import Config
from marketcard.core.exceptions import MarketCardError
from marketcard.narrative.prompt import format_pct, format_price, to_fixed
from marketcard.snapshot import SnapshotAssembler

logger = logging.getLogger(__name__)

_HERE = Path(__file__).resolve().parent.parent

router = APIRouter()

templates = Jinja2Templates(directory=_HERE / "templates")
templates.env.filters["price"] = format_price
templates.env.filters["pct"] = format_pct
templates.env.filters["trillions"] = lambda n: f"${to_fixed(n / 1e12, 2)}T"
templates.env.filters["billions"] = lambda n: f"${to_fixed(n / 1e9, 1)}B"


def _gauge_label(score: float) -> str:
    if score < 25:
        return "Extreme Fear"
    if score < 45:
        return "Fear"
    if score <= 55:
        return "Neutral"
    if score <= 75:
        return "Greed"
    return "Extreme Greed"


@router.get("/card", response_class=HTMLResponse)
async def card(
    request: Request,
    assembler: SnapshotAssembler = Depends(get_assembler),
    config: Config = Depends(get_config),
) -> Response:
    try:
        data = await assembler.assemble()
    except MarketCardError:
        logger.exception("card_render_failed")
        return PlainTextResponse("Card render error", status_code=500)

    return templates.TemplateResponse(
        request,
        "market.html",
        {
            "data": data,
            "caption": config.card.caption,
            "sentiment_label": _gauge_label(float(data.fear_greed)),
        },
    )


@router.get("/preview")
async def preview() -> RedirectResponse:
    return RedirectResponse(url="/card")
