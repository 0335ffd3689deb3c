"""marketcard.core.types

Lightweight dataclasses for hot-path objects.

Pydantic models own IO boundaries; dataclasses keep runtime lean.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of a fallible best-effort step: a value or a failure reason.

    Consumers map failures to their own defaults instead of catching.
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> Outcome[T]:
        return cls(error=reason)


@dataclass(frozen=True, slots=True)
class GlobalMetrics:
    total_market_cap: float
    market_cap_change_pct: float  # fraction
    volume_24h: float
    volume_change_pct: float  # fraction
    btc_dom: float  # percent
    eth_dom: float  # percent
