from typing import Literal

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str
    AUTO_CREATE_TABLES: bool = True

    # API
    API_TITLE: str = "Marketplace Messaging API"
    API_VERSION: str = "1.0.0"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Security
    SECRET_KEY: str

    # Messaging
    READ_MARK_SCOPE: Literal["counterpart", "product"] = "counterpart"
    DEFAULT_SUBJECT: str = "New Message"
    MAX_CONTENT_LENGTH: int = 5000

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
