from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Qomo Drops"
    DEBUG: bool = False  # FastAPI debug mode (tracebacks in 500 responses)
    LOG_LEVEL: str = "INFO"

    # Drop engine
    LOCK_DURATION_SECONDS: int = 30

    # Catalog: None means the built-in launch catalog
    CATALOG_PATH: str | None = None

    # State store: "memory" (single process) or "redis" (shared across workers)
    DROP_STORE_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_LOCK_TIMEOUT_SECONDS: float = 5.0

    # POST /drops/reset is for simulation and tests only
    ALLOW_RESET: bool = False


settings = Settings()
