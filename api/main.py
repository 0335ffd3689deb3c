from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.errors import marketcard_error_handler
from api.routes import get_api_router, get_card_router
from marketcard import __version__
from marketcard.core.client import ClientConfig, DataClient
from marketcard.core.config import Config
from marketcard.core.exceptions import MarketCardError


def create_app(config: Config | None = None) -> FastAPI:
    start = time.monotonic()
    config = config or Config.load()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.started_at = start

        # Expose config/client in app state for dependency injection + tests.
        app.state.config = getattr(app.state, "config", None) or config

        created_client = False
        if getattr(app.state, "client", None) is None:
            app.state.client = DataClient(ClientConfig.from_http(app.state.config.http))
            created_client = True

        yield

        if created_client:
            await app.state.client.aclose()

    openapi_tags = [
        {"name": "health", "description": "Liveness and version metadata."},
        {"name": "snapshot", "description": "Freshly assembled market snapshot."},
    ]

    app = FastAPI(
        title="marketcard API",
        description="Market overview card: data, narrative, preview",
        version=__version__,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.started_at = start

    app.add_exception_handler(MarketCardError, marketcard_error_handler)

    app.include_router(get_api_router(), prefix="/api/v1")
    app.include_router(get_card_router(), include_in_schema=False)
    return app


# Module-level app for uvicorn (e.g. `uvicorn api.main:app`).
app = create_app()
