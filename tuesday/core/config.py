from functools import lru_cache
from pathlib import Path

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Bootstrap admin
    admin_email: str | None = Field(
        default=None,
        description="Email of the admin user ensured at API startup",
    )
    admin_name: str = Field(default="Administrator", description="Name of the bootstrap admin")

    # Database
    db_path: str = Field(default="./data/tuesday.db", description="Path to SQLite database file")
    database_url: str | None = Field(
        default=None,
        description="Full async database URL; overrides db_path when set",
    )

    # API server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=4000)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Client
    api_base_url: str = Field(
        default="http://localhost:4000/api",
        description="Base URL of the REST API used by the Streamlit client",
    )
    api_timeout_seconds: float = Field(default=30.0)

    # App
    app_name: str = Field(default="Tuesday")
    debug: bool = Field(default=False)

    @computed_field
    @property
    def db_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.db_path}"

    @computed_field
    @property
    def db_directory(self) -> Path:
        return Path(self.db_path).parent


@lru_cache
def get_settings() -> Settings:
    return Settings()
