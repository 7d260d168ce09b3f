from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration sourced from environment variables."""

    fact_check_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("fact_check_api_key", "google_factcheck_api_key"),
    )
    fact_check_api_url: str = "https://factchecktools.googleapis.com/v1alpha1/claims:search"
    fact_check_timeout: float = 8.0
    fact_check_language: str = "en"
    fact_check_max_queries: int = 3
    fact_check_page_size: int = 5
    fetch_timeout: float = 15.0
    data_dir: str | None = None
    min_text_length: int = 10
    max_text_length: int = 50000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
