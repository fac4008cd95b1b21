# freshbox/core/config.py

from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "freshbox-api"
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./freshbox.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"  # comma separated

    # Startup
    SEED_DEFAULT_CATALOG: bool = True

    # Order lifecycle
    ENFORCE_STATUS_TRANSITIONS: bool = False
    REVENUE_COMPLETED_ONLY: bool = False
    DELIVERY_OFFSET_DAYS: int = 2
    ORDER_NUMBER_PREFIX: str = "FB"

    # Checkout form minimums
    MIN_PHONE_LENGTH: int = 11
    MIN_ADDRESS_LENGTH: int = 10

    # Wallet payment stub (Easypaisa / JazzCash)
    PAYMENT_CALLBACK_DELAY_SECONDS: float = 2.0

    # Rate limiting for public write endpoints, disabled without redis
    REDIS_URL: Optional[str] = None
    RATE_LIMIT_MAX_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False  # Allow lowercase env vars
        extra = "ignore"

settings = Settings()
