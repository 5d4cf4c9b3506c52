"""
Application configuration using Pydantic Settings
"""

from typing import Literal
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Settings
    api_title: str = "Component Identifier API"
    api_description: str = "Allocates unique, check-digit protected component identifiers"
    api_version: str = "1.0.0"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging Settings
    log_level: str = "INFO"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = "data/app.log"

    # Uniqueness Verification Settings
    verification_chunk_size: int = 10_000
    verification_max_workers: int = 1  # >1 queries chunks concurrently

    # Allocation Loop Settings
    allocation_draw_warning_threshold: int = 100_000
    allocation_max_draws_per_id: int = 1_000
    allocation_min_draw_budget: int = 1_000_000
    # When true, unknown partition codes fail instead of skipping verification
    strict_partition_check: bool = False
    # Upper bound for a single HTTP reservation request
    max_reserve_quantity: int = 100_000

    # Component Store Settings
    store_backend: Literal["elasticsearch", "memory"] = "elasticsearch"
    es_url: str = "http://localhost:9200"
    es_index_prefix: str = ""
    es_username: str = ""
    es_password: str = ""
    es_timeout: float = 30.0

    @field_validator("verification_chunk_size", "verification_max_workers")
    @classmethod
    def ensure_positive(cls, v: int) -> int:
        """Reject zero or negative batching values.

        Args:
            v: Chunk size or worker count read from the environment.

        Returns:
            int: The value unchanged when it is at least 1
        """
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("es_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def es_auth(self) -> tuple | None:
        """Basic auth tuple for the store, or None when no credentials are set."""
        if self.es_username:
            return (self.es_username, self.es_password)
        return None


# Global settings instance
settings = Settings()
