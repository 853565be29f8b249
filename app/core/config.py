from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Vendors Service"
    app_env: str = "development"
    app_port: int = 8084
    frontend_url: str = "*"

    # Database (PostgreSQL via asyncpg in production, SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./vendors_dev.db",
        alias="DATABASE_URL",
    )
    db_auto_create: bool = Field(default=True, alias="DB_AUTO_CREATE")
    db_pool_size: int = Field(default=10, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=5, alias="DB_MAX_OVERFLOW")

    # Identity service (bearer token validation)
    identity_service_url: str = Field(
        default="http://localhost:8081", alias="IDENTITY_SERVICE_URL",
    )
    identity_timeout_seconds: float = Field(default=5.0, alias="IDENTITY_TIMEOUT_SECONDS")

    # Per-request deadline; the in-flight store call is cancelled when it expires
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")

    log_level: str | None = Field(default=None, alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.app_env == "development" else "INFO"

settings = Settings()
