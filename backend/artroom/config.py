"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""
    
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "artroomServer"
    mongo_timeout_ms: int = 5000
    
    # Walters Art Museum catalog
    walters_api_url: str = "http://api.thewalters.org/v1/objects"
    walters_api_key: str | None = None
    walters_image_prefix: str = "http://static.thewalters.org/images/"
    walters_image_postfix: str = "?width=500"
    catalog_timeout_seconds: float = 10.0
    
    # Moxtra collaboration service
    moxtra_api_url: str = "https://api.moxtra.com"
    moxtra_client_id: str = ""
    moxtra_client_secret: str = "CHANGE_ME_IN_PRODUCTION"
    moxtra_grant_type: str = "http://www.moxtra.com/auth_uniqueid"
    moxtra_timeout_seconds: float = 10.0
    moxtra_token_refresh_margin_seconds: int = 60
    moxtra_token_retry_seconds: int = 30
    
    # Registration workflow
    registration_compensation_enabled: bool = True
    
    # HTTP
    cors_allow_origins: list[str] = ["*"]
    
    # Logging
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
