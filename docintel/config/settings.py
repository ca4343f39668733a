from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docintel"
    db_username: str = "docintel"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5

    files_root: Path = Path("/app/files")
    scan_temp_dir: Path = Path("/tmp/docintel-scans")

    pdf_engine: str = "pdfplumber"
    ocr_language: str = "por"

    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)
    search_default_limit: int = Field(default=8, gt=0)
    search_min_similarity: float | None = None

    embedding_provider: str = "openai"
    embedding_api_key: str = ""
    embedding_model_name: str = "text-embedding-3-small"
    embedding_base_url: str = ""
    embedding_timeout_seconds: int = 30
    embedding_max_retries: int = 2

    analysis_provider: str = "openai"
    analysis_api_key: str = ""
    analysis_model_name: str = "gpt-4o-mini"
    analysis_base_url: str = ""
    analysis_timeout_seconds: int = 60
    analysis_max_retries: int = 2
    analysis_temperature: float = 0.0
    analysis_seed: int = 42
    analysis_max_text_chars: int = Field(default=60_000, gt=0)

    @model_validator(mode="after")
    def _check_chunk_overlap(self) -> "Settings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
