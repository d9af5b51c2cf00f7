from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    http_host: str = "0.0.0.0"
    http_port: int = 8000

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "legal"
    db_username: str = "legal"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"
    files_root: Path = Path("/app/uploads")

    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    storage_timeout_seconds: int = 30

    llm_provider: str = "openai"
    llm_api_key: str = ""
    llm_model_name: str = "gpt-4o-mini"
    llm_base_url: str | None = None
    llm_timeout_seconds: int = 60
    llm_retry_max_attempts: int = 1
    llm_retry_base_delay: float = 1.0
    llm_retry_max_delay: float = 20.0

    max_content_chars: int = 8000
    chunk_size_chars: int = 12000
    analysis_version: str = "1.0"
