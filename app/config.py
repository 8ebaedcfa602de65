from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Track Catalog API"
    debug: bool = False
    environment: str = "development"
    port: int = 3000
    log_level: str = "INFO"

    # Database
    database_host: str
    database_port: int = 5432
    database_user: Optional[str] = None
    database_password: Optional[str] = None
    database_name: Optional[str] = None
    database_url: Optional[str] = None  # Overrides the assembled Postgres URL (local SQLite, tests)

    # TLS root certificate: file in development, PEM value in production
    ca_cert_path: str = "ca_cert.crt"
    ca_cert: Optional[str] = None

    # Spotify API (client credentials flow)
    spotify_client_id: str
    spotify_client_secret: str

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
