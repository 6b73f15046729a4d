from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Recipe Sharing API"
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 1234
    LOGGING_CONFIG: str = "logging.ini"

    # Database
    DATABASE_URL: str = "sqlite:///./recipes.db"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Recent recipes pagination
    RECENT_RECIPES_DEFAULT_TAKE: int = 20
    RECENT_RECIPES_MAX_TAKE: int = 100

    # Length of the random token appended to titles and slugs
    RANDOM_SUFFIX_LENGTH: int = 6

    # slowapi rate limit string for recipe creation
    CREATE_RECIPE_RATE_LIMIT: str = "30/minute"

    # Structured request logging
    LOG_SLOW_THRESHOLD_MS: int = 500
    LOG_SAMPLE_RATE: float = 0.05

    # Seed data
    SEED_USERNAME: str = "admin"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

settings = Settings()
