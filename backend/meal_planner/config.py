"""Configuration management for the meal planner backend."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in .env.example; treated the same as "not set"
SUPABASE_PLACEHOLDER_URL = "https://placeholder-project-url.supabase.co"
SUPABASE_PLACEHOLDER_KEY = "placeholder-anon-key-here"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=("../.env.local", "../.env", ".env.local", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    environment: str = "development"
    log_level: str = "info"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # OpenAI
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: float = 30.0
    openai_max_retries: int = 1  # SDK-level transport retries, not schema retries

    # Supabase (optional - plan persistence is disabled without it)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def supabase_key(self) -> str | None:
        """Service role key when available, otherwise the anon key."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def persistence_enabled(self) -> bool:
        """Check if Supabase plan persistence is properly configured."""
        url = self.supabase_url
        key = self.supabase_key
        if not url or not key:
            return False
        return (
            url != SUPABASE_PLACEHOLDER_URL
            and key != SUPABASE_PLACEHOLDER_KEY
            and ".supabase.co" in url
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
