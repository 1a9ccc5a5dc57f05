"""
VidTube - Application Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import Optional, List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    app_name: str = "VidTube"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Identity (tokens are issued by the external identity provider)
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"

    # Database
    database_url: str = "sqlite+aiosqlite:///./vidtube.db"
    database_echo: bool = False
    query_timeout_seconds: float = 10.0

    # Media store
    media_store_url: Optional[str] = None
    media_store_api_key: Optional[str] = None
    media_timeout_seconds: float = 60.0

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Rate Limiting
    rate_limit_per_minute: int = 120

    # CORS
    cors_origins: str = "http://localhost:5173"
    cors_allow_credentials: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def async_database_url(self) -> str:
        """Database URL with an async driver"""
        # Convert postgresql:// to postgresql+asyncpg://
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra environment variables


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
