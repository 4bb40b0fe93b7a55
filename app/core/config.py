from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://progress:progress@db:5432/progress"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Which statuses count as "complete" when the caller does not say.
    # "verified" -> VERIFIED only; "submitted" -> SUBMITTED or better.
    DEFAULT_COMPLETE_SET: Literal["verified", "submitted"] = "verified"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
