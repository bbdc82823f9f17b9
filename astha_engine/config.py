"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "astha-engine"
    log_level: str = "INFO"

    # Leaderboard
    high_value_country: str = "SA"
    high_value_badge: str = "KSA Shopper"

    # Debt manager
    projection_horizon_months: int = 36
    projection_extra_budget: int = 5000  # BDT added on top of the minimums every month
    default_mandate_provider: str = "NPSB"
    upcoming_dues_limit: int = 6

    # Demo dataset
    demo_seed: int = 20250905
    demo_months: int = 12


settings = Settings()
