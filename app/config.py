# app/config.py
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Catalog settings, read from CATALOG_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", case_sensitive=False)

    # Storage
    data_dir: Path = Path("data")
    products_file: str = "products.json"
    users_file: str = "users.json"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = ["*"]
    docs_url: str = "/api-docs"

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    # Client side (cli.py, demo.py)
    api_url: str = "http://127.0.0.1:5000"

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
