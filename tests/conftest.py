from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# uv/pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from marketcard.core.config import Config  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # A developer's real key must never leak into request headers under test.
    monkeypatch.delenv("CMC_API_KEY", raising=False)


@pytest.fixture()
def test_config() -> Config:
    """Repo defaults with a fixed API key."""

    cfg = Config.from_repo_defaults(REPO_ROOT)
    cfg.coinmarketcap.api_key = "test-key"
    return cfg


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture()
def anyio_backend() -> str:
    # The project is asyncio-only (asyncio.TaskGroup / asyncio.wait_for).
    return "asyncio"
