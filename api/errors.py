from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from marketcard.core.exceptions import ConfigError, MarketCardError, UpstreamError

_STATUS: dict[type[MarketCardError], tuple[int, str]] = {
    UpstreamError: (502, "upstream_error"),
    ConfigError: (500, "config_error"),
}


def error_status(exc: MarketCardError) -> tuple[int, str]:
    for cls, mapped in _STATUS.items():
        if isinstance(exc, cls):
            return mapped
    return 500, "internal_error"


async def marketcard_error_handler(request: Request, exc: MarketCardError) -> JSONResponse:
    status, code = error_status(exc)
    body = {"error": {"code": code, "message": str(exc)}}
    return JSONResponse(status_code=status, content=body)
