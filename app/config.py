"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Type-safe configuration sourced from .env / environment."""

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_model: str = "google/gemini-2.5-flash"
    ai_gateway_api_key: str = ""
    ai_temperature: float = 0.7
    ai_timeout_seconds: float | None = None
    ai_max_retries: int = 0
    ai_retry_backoff_seconds: float = 1.0

    # Quiz
    default_num_questions: int = 5

    # PostgreSQL
    pg_host: str = "localhost"
    pg_port: int = 5432
    pg_database: str = "quizgen"
    pg_user: str = "postgres"
    pg_password: str = "postgres"
    pg_pool_min: int = 1
    pg_pool_max: int = 5

    # Database backend
    db_backend: str = "memory"  # memory | psycopg2

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
