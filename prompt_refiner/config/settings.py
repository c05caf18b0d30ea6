from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "prompt_refiner"
    db_username: str = "prompt_refiner"
    db_password: str = "secret"
    db_application_name: str = "prompt-refiner"
    db_pool_min_size: int = Field(default=1, ge=1)
    db_pool_max_size: int = Field(default=10, ge=1)

    gateway_provider: str = "gateway"
    gateway_base_url: str = "https://ai.gateway.lovable.dev/v1"
    gateway_api_key: str = ""
    gateway_model_name: str = "google/gemini-3-flash-preview"
    gateway_timeout_seconds: int = 120
    # OpenAI-compatible sampling range
    gateway_temperature: float = Field(default=0.3, ge=0.0, le=2.0)

    storage_root: str = "storage/prompt-files"
    storage_public_base_url: str = "http://localhost:8000/prompt-files"

    min_text_length: int = 10
    max_text_length: int = 10000
    max_files: int = 10
    max_file_size_mb: int = 20

    history_default_limit: int = 50
