from __future__ import annotations

from fastapi import APIRouter

from api.routes import card, health, snapshot


def get_api_router() -> APIRouter:
    router = APIRouter()

    router.include_router(health.router, tags=["health"])
    router.include_router(snapshot.router, tags=["snapshot"])

    return router


def get_card_router() -> APIRouter:
    return card.router
