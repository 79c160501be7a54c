"""Application configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_host: str = Field(default="0.0.0.0", description="Host to bind the service")
    service_port: int = Field(default=3000, description="Port to bind the service")
    service_workers: int = Field(default=1, description="Number of worker processes")
    log_level: str = Field(default="info", description="Logging level")

    # Database - PostgreSQL connection
    database_url: str | None = Field(
        default=None,
        description="Full database connection URL (overrides individual fields)",
    )
    database_user: str = Field(default="training_dev", description="Database username")
    database_password: str = Field(default="dev_password", description="Database password")
    database_host: str = Field(default="localhost", description="Database host")
    database_port: int = Field(default=5432, description="Database port")
    database_name: str = Field(default="training_log", description="Database name")
    database_pool_min_size: int = Field(
        default=2,
        description="Minimum database connection pool size",
    )
    database_pool_max_size: int = Field(
        default=10,
        description="Maximum database connection pool size",
    )
    database_command_timeout: float = Field(
        default=60.0,
        description="Per-statement timeout in seconds",
    )
    database_ssl_mode: str = Field(
        default="prefer",
        description="SSL mode: disable, prefer, require",
    )

    # Security
    secret_key: str = Field(
        default="development-secret-key-change-in-production",
        description="Shared secret used to sign bearer tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int | None = Field(
        default=None,
        description="Token lifetime in minutes (unset = tokens never expire)",
    )
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor for password hashes")

    # CORS
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Allowed CORS origins (comma-separated)",
    )

    def get_allowed_origins(self) -> list[str]:
        """Get allowed origins as a list."""
        if isinstance(self.allowed_origins, str):
            return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]
        return self.allowed_origins

    # Object storage (Supabase Storage bucket)
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_key: str | None = Field(default=None, description="Supabase service key")
    storage_bucket: str = Field(default="training-media", description="Bucket for uploads")
    max_upload_size_mb: int = Field(default=50, description="Maximum upload size in megabytes")

    def get_database_url(self) -> str:
        """
        Get PostgreSQL connection URL.

        If database_url is set, use it directly.
        Otherwise, construct from individual components.
        """
        from urllib.parse import quote_plus

        if self.database_url:
            return self.database_url

        # URL-encode username and password to handle special characters
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)

        ssl_param = ""
        if self.database_ssl_mode in ("require", "prefer"):
            ssl_param = f"?sslmode={self.database_ssl_mode}"

        return (
            f"postgresql://{user}:{password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}{ssl_param}"
        )


# Global settings instance
settings = Settings()
