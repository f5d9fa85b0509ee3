from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Kate's Nails Studio"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_OPEN_HOUR: int = 12
    BUSINESS_CLOSE_HOUR: int = 21
    SLOT_GRANULARITY_MINUTES: int = 30
    BOOKING_HORIZON_DAYS: int = 365

    ADMIN_PHONE_NUMBERS: list[str] = ["+12015550100"]

    BACKEND_URL: str | None = None
    BACKEND_ANON_KEY: str | None = None

    IDENTITY_API_URL: str = "https://api.clerk.com/v1"
    IDENTITY_SECRET_KEY: str | None = None

    SESSION_STORE: str = "memory"  # "memory" or "json"
    SESSION_DATA_DIR: str = "./data/sessions"


settings = Settings()
