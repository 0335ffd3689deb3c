from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from marketcard.core.client import ClientConfig, DataClient
from marketcard.core.config import Config
from marketcard.snapshot import SnapshotAssembler


@lru_cache
def _load_config() -> Config:
    return Config.load()


def get_config(request: Request) -> Config:
    cfg = getattr(request.app.state, "config", None)
    return cfg or _load_config()


def get_client(request: Request) -> DataClient:
    client = getattr(request.app.state, "client", None)
    if client is None:
        # Lifespan normally owns this; tests may skip it.
        client = DataClient(ClientConfig.from_http(get_config(request).http))
        request.app.state.client = client
    return client


def get_assembler(request: Request) -> SnapshotAssembler:
    assembler = getattr(request.app.state, "assembler", None)
    if assembler is not None:
        return assembler
    return SnapshotAssembler(get_config(request), get_client(request))
