"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Dorm Association Event Shop"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./dorm_shop.db")
    business_timezone: str = getenv("BUSINESS_TIMEZONE", "Asia/Manila")
    delivery_options_days_ahead: int = int(getenv("DELIVERY_OPTIONS_DAYS_AHEAD", "7"))
    default_delivery_lead_days: int = int(getenv("DEFAULT_DELIVERY_LEAD_DAYS", "1"))
    default_daily_cutoff_time: str = getenv("DEFAULT_DAILY_CUTOFF_TIME", "14:00")
    schedule_refresh_seconds: int = int(getenv("SCHEDULE_REFRESH_SECONDS", "60"))


settings: Settings = Settings()
