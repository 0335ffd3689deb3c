from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_assembler
from marketcard.core.models import MarketSnapshot
from marketcard.snapshot import SnapshotAssembler

router = APIRouter()


@router.get("/snapshot", response_model=MarketSnapshot)
async def get_snapshot(assembler: SnapshotAssembler = Depends(get_assembler)) -> MarketSnapshot:
    # UpstreamError is mapped to 502 by the app-level handler.
    return await assembler.assemble()
