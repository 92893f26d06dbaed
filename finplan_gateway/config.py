"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "finplan-gateway"
    log_level: str = "INFO"

    # Debt simulation
    periods_per_year: int = 12
    max_simulation_periods: int = 1200  # 100 years of monthly periods

    # Savings estimation
    savings_precision: float = 1.0 / 12.0  # month-level precision on a yearly period


settings = Settings()
