"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Nothing is strictly required at startup. Ranking needs OPENAI_API_KEY and
    fails with a configuration error when it is missing; board access needs a
    Pinterest credential, either from PINTEREST_ACCESS_TOKEN or connected at
    runtime through /api/pinterest/token.

    Optional environment variables:
        - HOST / PORT: Server bind address (default: 0.0.0.0:8787)
        - DATA_DIR: Directory for the JSON document store (default: ./data)
        - ENVIRONMENT: Environment name (development, staging, production)
        - OPENAI_EMBED_MODEL: Embedding model tag (default: text-embedding-3-small)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8787, description="Server port")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Storage
    # ==========================================================================
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding pins, products and embedding cache documents"
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def parse_data_dir(cls, v):
        if isinstance(v, str):
            return Path(v)
        return v

    # ==========================================================================
    # Pinterest Integration
    # ==========================================================================
    pinterest_app_id: str = Field(default="", description="Pinterest app ID (client_id)")
    pinterest_app_secret: str = Field(default="", description="Pinterest app secret (client_secret)")
    pinterest_redirect_uri: str = Field(default="", description="Pinterest OAuth redirect URI")
    pinterest_api_base_url: str = Field(
        default="https://api.pinterest.com/v5",
        description="Pinterest API base URL"
    )
    pinterest_access_token: str = Field(
        default="",
        description="Optional Pinterest access token connected at startup (local/dev)"
    )
    pinterest_access_token_scope: str = Field(
        default="",
        description="Scope string for the startup access token (optional)"
    )
    pinterest_request_timeout_seconds: int = Field(
        default=10,
        description="Timeout for Pinterest API requests (seconds)"
    )
    pinterest_page_size_cap: int = Field(
        default=100,
        description="Max pins requested per board page"
    )

    @property
    def pinterest_oauth_configured(self) -> bool:
        return bool(
            self.pinterest_app_id
            and self.pinterest_app_secret
            and self.pinterest_redirect_uri
        )

    # ==========================================================================
    # Board Import
    # ==========================================================================
    import_default_limit: int = Field(default=100, description="Default pins per board import")
    import_max_limit: int = Field(default=200, description="Upper clamp for board import limit")

    # ==========================================================================
    # OpenAI (Embeddings)
    # ==========================================================================
    openai_api_key: str = Field(default="", description="OpenAI API key for text embeddings")
    openai_embed_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model; also the version tag of cache documents"
    )
    openai_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single embedding batch call (seconds)"
    )
    embedding_batch_size: int = Field(
        default=50,
        ge=1,
        description="Max texts per embedding request"
    )

    # ==========================================================================
    # Ranking
    # ==========================================================================
    rank_default_top_k: int = Field(default=24, description="Default number of ranked products")
    rank_max_top_k: int = Field(default=100, description="Upper clamp for topK")


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "environment": "testing",
        "debug": True,
        "openai_api_key": "test-openai-key",
        "pinterest_access_token": "",
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
