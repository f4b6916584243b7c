# app/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (only used for admin Supabase client)
      - DATABASE_URL (cart snapshots when CART_STORAGE_BACKEND=database)
      - GROQ_API_KEY (support chatbot; chat answers 500 without it)
    """

    PROJECT_NAME: str = "SultaniElectro Storefront API"
    API_V1_STR: str = "/api/v1"

    # Supabase config
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Local database (cart snapshots)
    DATABASE_URL: str = "sqlite:///./sultani.db"

    # Cart persistence
    CART_STORAGE_BACKEND: Literal["memory", "file", "database"] = "file"
    CART_STORAGE_DIR: str = ".carts"
    CART_STORAGE_KEY: str = "sultani-cart"

    # Delivery pricing (PKR)
    FREE_DELIVERY_THRESHOLD: float = 50000
    STANDARD_DELIVERY_FEE: float = 500

    # Support chatbot (OpenAI-compatible chat completions)
    GROQ_API_KEY: str | None = None
    GROQ_API_URL: str = "https://api.groq.com/openai/v1/chat/completions"
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    CHAT_HISTORY_WINDOW: int = 6
    CHAT_TIMEOUT_SECONDS: float = 30.0

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://electrosultani.com",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
