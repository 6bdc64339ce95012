"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from finsim_engine.domain.portfolio import DEFAULT_PREVIEW_MONTHS
from finsim_engine.domain.scenario import (
    DEFAULT_SIMULATED_CARD_APR,
    DEFAULT_SIMULATED_LOAN_TERM,
    DEFAULT_SUGGESTION_CONTRIBUTION,
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "finsim-engine"
    log_level: str = "INFO"

    # Projection
    default_horizon_months: int = 12
    max_horizon_months: int = 600

    # Loans
    max_loan_term_months: int = 600

    # What-if defaults
    simulated_loan_term_months: int = DEFAULT_SIMULATED_LOAN_TERM
    simulated_card_interest_rate: float = DEFAULT_SIMULATED_CARD_APR
    suggestion_monthly_contribution: float = DEFAULT_SUGGESTION_CONTRIBUTION
    portfolio_preview_months: int = DEFAULT_PREVIEW_MONTHS

    # External advisor (text generation service)
    advisor_api_base: str = "http://localhost:8003"
    advisor_timeout_seconds: float = 30.0
    advisor_max_retries: int = 3
    advisor_backoff_base: float = 1.0  # Exponential backoff base in seconds


settings = Settings()
