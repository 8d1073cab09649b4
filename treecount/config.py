"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Tracking
    guarded_region_ids: set[int] = Field(
        default={6198, 6454},
        description="Region ids excluded from all tracking (Woodcutting Guild)"
    )

    # Overlay debug views
    render_facing_tree: bool = Field(
        default=False,
        description="Include the tree the local player is facing in the overlay snapshot"
    )
    render_tree_tiles: bool = Field(
        default=False,
        description="Include every tree footprint in the overlay snapshot"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=6000,
        description="Maximum snapshot reads per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Tree Count",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
