# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for:
# API configuration (version, project name)
# Security settings (secret key, JWT algorithm)
# Database connection and transaction behaviour


import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    # API configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Friendship Graph API"
    VERSION: str = "0.1.0"

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "development_secret_key")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    ALGORITHM: str = "HS256"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./friendships.db")
    DB_ISOLATION_LEVEL: str = "SERIALIZABLE"
    # Extra attempts after a store-level conflict (unique violation, serialization failure)
    TRANSACTION_RETRY_ATTEMPTS: int = 1

    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost",
    ]

    # Development settings - set these differently in production
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ["true", "1", "t"]
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

# Create settings instance
settings = Settings()
