from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data"

    REMINDER_LEAD_HOURS: int = 24

    NOTIFICATION_WEBHOOK_URL: str | None = None
    CALENDAR_SYNC_WEBHOOK_URL: str | None = None
    WEBHOOK_API_KEY: str | None = None
    HTTP_TIMEOUT_SECONDS: float = 10.0
    SIDE_EFFECT_WORKERS: int = 4


settings = Settings()
