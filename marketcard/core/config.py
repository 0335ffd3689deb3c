"""marketcard.core.config

Two config surfaces only:
1) `config/default.yaml` (optionally `config/user.yaml`)
2) Environment variables (secrets, deployment overrides)

Everything else is derived. Components receive the parts they need at
construction time; nothing reads the environment behind their back.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from marketcard import DEFAULT_SYMBOLS
from marketcard.core.exceptions import ConfigError


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


class CoinMarketCapConfig(BaseModel):
    api_key: str = ""
    base_url: str = "https://pro-api.coinmarketcap.com"


class SentimentConfig(BaseModel):
    # Undocumented public endpoint. Shape may change without notice.
    primary_url: str = "https://api.coinmarketcap.com/data-api/v3/fear-greed/chart"
    fallback_url: str = "https://api.alternative.me/fng/?limit=1"
    window_days: int = 7
    neutral_default: int = 50

    @field_validator("neutral_default")
    @classmethod
    def neutral_in_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("neutral_default must be within 0..100")
        return v


class AnalysisConfig(BaseModel):
    enabled: bool = True
    url: str = "https://charts-277369611639.us-central1.run.app/ai-analysis-general"
    timeout_s: float = 12.0
    max_coins: int = 8


class UniverseConfig(BaseModel):
    symbols: list[str] = list(DEFAULT_SYMBOLS)

    @field_validator("symbols")
    @classmethod
    def symbols_upper_nonempty(cls, v: list[str]) -> list[str]:
        out = [s.upper().strip() for s in v if s and s.strip()]
        if not out:
            raise ValueError("universe.symbols must not be empty")
        return out


class HttpConfig(BaseModel):
    timeout_s: float = 20.0
    max_bytes: int = 1024 * 1024


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class ApiConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 3000
    base_url: str = ""


class CardConfig(BaseModel):
    caption: str = "Market Overview • Spectre AI"


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    config_dir: Path = Path("config")

    coinmarketcap: CoinMarketCapConfig = Field(default_factory=CoinMarketCapConfig)
    sentiment: SentimentConfig = Field(default_factory=SentimentConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    universe: UniverseConfig = Field(default_factory=UniverseConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    card: CardConfig = Field(default_factory=CardConfig)

    model_config = {"env_prefix": "MARKETCARD_", "env_nested_delimiter": "__"}

    @model_validator(mode="after")
    def _api_key_fallback(self) -> Config:
        # Bare CMC_API_KEY is what every deployment guide for the provider uses.
        if not self.coinmarketcap.api_key:
            self.coinmarketcap.api_key = os.environ.get("CMC_API_KEY", "")
        return self

    @property
    def public_base_url(self) -> str:
        return self.api.base_url or f"http://localhost:{self.api.port}"

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config root must be a mapping: {path}")

        # user.yaml overlays default.yaml when both live in the same directory.
        default_path = path.parent / "default.yaml"
        if path.name != "default.yaml" and default_path.exists():
            base = yaml.safe_load(default_path.read_text()) or {}
            raw = _deep_merge(base, raw)

        raw.setdefault("config_dir", str(path.parent))
        return cls(**raw)

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        return cls.from_yaml(root / "config" / "default.yaml")

    @classmethod
    def load(cls, repo_root: Path | None = None) -> Config:
        """user.yaml if present, else default.yaml, else pure defaults + env."""

        root = repo_root or Path.cwd()
        user_path = root / "config" / "user.yaml"
        if user_path.exists():
            return cls.from_yaml(user_path)
        default_path = root / "config" / "default.yaml"
        if default_path.exists():
            return cls.from_yaml(default_path)
        return cls()
