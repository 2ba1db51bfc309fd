from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BACKEND_BASE_URL: str | None = None
    BACKEND_API_TOKEN: str | None = None
    HTTP_TIMEOUT_SECONDS: float = 10.0

    SESSION_STORE: str = "memory"  # "memory" | "json"
    SESSION_DATA_DIR: str = "./data/sessions"


settings = Settings()
