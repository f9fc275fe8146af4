# app/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from functools import lru_cache


class Settings(BaseSettings):
    ENV: str = "development"
    DATA_DIR: Path = Path("data")  # where the CSV / XLSX tables live
    PRODUCTS_FILE: str = "products.csv"
    CATEGORIES_FILE: str = "categories.csv"
    SUPPLIERS_FILE: str = "suppliers.csv"

    JWT_SECRET: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    # comma separated list, e.g. CORS_ORIGINS=http://localhost:3000,https://shop.example
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    # Example .env:
    # DATA_DIR=./data
    # PRODUCTS_FILE=products.xlsx

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
