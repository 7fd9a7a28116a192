from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Fixed offset used to turn "now" into a business calendar date.
    BUSINESS_UTC_OFFSET_HOURS: int = -3

    BLOCK_STORE_PROVIDER: str | None = None  # "memory" | "json"; defaults by ENV
    BLOCK_STORE_PATH: str = "./data/calendar_blocks.json"

    BOOKING_API_BASE_URL: str | None = None
    BOOKING_API_TOKEN: str | None = None
    BOOKING_API_TIMEOUT_SECONDS: float = 15.0

    TRAILING_PERIODS: int = 6
    DASHBOARD_TRAILING_MONTHS: int = 6
    UPCOMING_WINDOW_DAYS: int = 7
    UPCOMING_LIMIT: int = 5


settings = Settings()
