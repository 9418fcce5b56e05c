from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod|test
    TZ: str = Field(default="America/Denver")  # site-local "today"

    # Security
    JWT_SECRET: str = Field(default="change-me")
    JWT_ALG: str = Field(default="HS256")
    JWT_EXPIRES_MIN: int = Field(default=60 * 12)

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Files
    EXPORT_DIR: str = Field(default="/app/data/exports")

    # Forecasting policy
    PROGRESS_WEIGHT_PILES: float = Field(default=0.15)
    PROGRESS_WEIGHT_RACKING: float = Field(default=0.25)
    PROGRESS_WEIGHT_MODULES: float = Field(default=0.60)
    ROLLING_WINDOW_ENTRIES: int = Field(default=7, ge=1)
    HEALTH_YELLOW_MAX_DAYS: int = Field(default=7, ge=0)

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)
    DEMO_ADMIN_LOGIN: str = Field(default="admin")
    DEMO_ADMIN_PASSWORD: str = Field(default="admin123")

    @model_validator(mode="after")
    def _weights_sum_to_one(self):
        total = self.PROGRESS_WEIGHT_PILES + self.PROGRESS_WEIGHT_RACKING + self.PROGRESS_WEIGHT_MODULES
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"PROGRESS_WEIGHT_* must sum to 1.0, got {total}")
        return self


settings = Settings()
