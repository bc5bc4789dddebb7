from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

from app.core.errors import ConfigurationError

# Async driver used by the API for each backend when the URL names none.
ASYNC_DRIVERS = {
    "postgresql": "asyncpg",
    "sqlite": "aiosqlite",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: str = Field(
        default="http://localhost:3000",
        validation_alias=AliasChoices("FRONTEND_URL", "VITE_FRONTEND_URL"),
    )
    CORS_ORIGINS: str = "http://localhost:3000"

    # Database. MONGOURI / MONGOURL are the names older deployments used.
    DATABASE_URL: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "MONGOURI", "MONGOURL"),
    )
    DATABASE_CONNECT_TIMEOUT: int = 10

    # QR codes
    QR_CODE_WIDTH: int = 64

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",")]

    def require_database_url(self) -> str:
        if not self.DATABASE_URL:
            raise ConfigurationError("DATABASE_URL is not set")
        return self.DATABASE_URL

    @property
    def sync_database_url(self) -> str | None:
        """DATABASE_URL with any driver suffix removed, for one-shot scripts."""
        if not self.DATABASE_URL:
            return None
        url = make_url(self.DATABASE_URL)
        return url.set(drivername=url.get_backend_name()).render_as_string(hide_password=False)

    @property
    def async_database_url(self) -> str:
        url = make_url(self.require_database_url())
        backend = url.get_backend_name()
        if backend in ASYNC_DRIVERS:
            url = url.set(drivername=f"{backend}+{ASYNC_DRIVERS[backend]}")
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
