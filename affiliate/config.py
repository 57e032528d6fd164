"""Affiliate platform configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class AffiliateSettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///affiliate.db"
    echo_sql: bool = False
    app_title: str = "Affiliate Platform"
    log_level: str = "INFO"

    # Workspace API tokens, comma-separated workspace_id:token pairs
    workspace_access_tokens: str = ""

    redis_url: str = "redis://localhost:6379/0"

    # Event ingestion (Tinybird-compatible events API)
    tinybird_api_url: str = "https://api.tinybird.co"
    tinybird_api_key: str = ""
    tinybird_timeout_seconds: float = 30.0

    # One-off lead backfill for a single workspace
    backfill_workspace_id: str = "clsvopiw0000ejy0grp821me0"
    backfill_cache_key: str = "framerMigratedExternalIdEventNames"
    backfill_domain: str = "framer.link"

    metatags_timeout_seconds: float = 5.0
    metatags_user_agent: str = "Mozilla/5.0 (compatible; AffiliateBot/1.0)"

    model_config = {"env_prefix": "AFF_", "env_file": ".env", "extra": "ignore"}

    @property
    def base_dir(self) -> Path:
        return Path(__file__).resolve().parent

    @property
    def workspace_tokens_map(self) -> dict[str, str]:
        """Parse comma-separated workspace_id:token pairs into {token: workspace_id}."""
        mapping: dict[str, str] = {}
        if not self.workspace_access_tokens.strip():
            return mapping

        for item in self.workspace_access_tokens.split(","):
            pair = item.strip()
            if not pair or ":" not in pair:
                continue
            workspace_id, token = pair.split(":", 1)
            workspace_id = workspace_id.strip()
            token = token.strip()
            if workspace_id and token:
                mapping[token] = workspace_id
        return mapping

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}


settings = AffiliateSettings()
