# fittrack/core/config.py

from pathlib import Path
from pydantic import EmailStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "FitTrack API"
    DEBUG: bool = False
    VERSION: str = "0.1.0"

    # Database Configuration
    DATABASE_URL: str

    # JWT / Security Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080

    # CORS Configuration
    FRONTEND_URL: str = "http://localhost:3000"

    # SendGrid Configuration (emails are skipped when no key is set)
    SENDGRID_API_KEY: str = ""
    EMAIL_FROM: EmailStr = "no-reply@fittrack.app"
    EMAIL_FROM_NAME: str = "FitTrack Team"

    # Goal analytics
    UPCOMING_GOAL_DAYS: int = 7
    FEED_PAGE_SIZE: int = 20

    # Optional: Environment
    ENVIRONMENT: str = "development"

    @property
    def is_sqlite(self) -> bool:
        """SQLite engines do not accept connection pool sizing options"""
        return self.DATABASE_URL.startswith("sqlite")

# Create a global settings instance
settings = Settings()
