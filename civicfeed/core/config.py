# File: civicfeed/core/config.py
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    .env file may contain (all optional, defaults shown):

    - APP_NAME=CivicFeed API
    - BACKEND_CORS_ORIGINS=http://localhost:5173,http://localhost:5174,http://localhost:3000
    - LOG_LEVEL=INFO
    - LOG_DIR=./logs (unset = console only)
    - GEMINI_API_KEY=your-gemini-key (unset = keyword fallback classifier)
    - GEMINI_MODEL=gemini-2.5-flash
    - CLASSIFIER_TIMEOUT_SECONDS=30
    - COLLAGE_MAX_IMAGES=9
    - COLLAGE_TILE_SIZE=256
    - DEMO_USER_ID=demo-user-id
    - RATE_LIMIT_ENABLED=true
    - RATE_LIMIT_CREATE=10/minute
    - RATE_LIMIT_ANALYZE=20/minute
    - SEED_ON_STARTUP=true
    """
    app_name: str = Field(default="CivicFeed API", alias="APP_NAME")
    backend_cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:5174,http://localhost:3000",
        alias="BACKEND_CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")

    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    classifier_timeout_seconds: float = Field(default=30.0, gt=0, alias="CLASSIFIER_TIMEOUT_SECONDS")

    collage_max_images: int = Field(default=9, ge=1, alias="COLLAGE_MAX_IMAGES")
    collage_tile_size: int = Field(default=256, ge=16, alias="COLLAGE_TILE_SIZE")

    demo_user_id: str = Field(default="demo-user-id", alias="DEMO_USER_ID")

    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_create: str = Field(default="10/minute", alias="RATE_LIMIT_CREATE")
    rate_limit_analyze: str = Field(default="20/minute", alias="RATE_LIMIT_ANALYZE")

    seed_on_startup: bool = Field(default=True, alias="SEED_ON_STARTUP")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

def cors_origins_list() -> List[str]:
    raw = settings.backend_cors_origins or ""
    return [x.strip().rstrip("/") for x in raw.split(",") if x.strip()]

settings = Settings()
