from pydantic_settings import BaseSettings
from typing import Union


class Settings(BaseSettings):
    # Database connection string - can be overridden via .env file
    # SQLite by default, any SQLAlchemy URL works (postgresql://user:pw@host/db)
    DATABASE_URL: str = "sqlite:///./coursehub.db"

    # bcrypt work factor used when hashing new passwords
    # Every hash embeds its own rounds, so changing this never breaks existing logins
    # Tests lower it to 4 (bcrypt's minimum) to keep registration fast
    BCRYPT_ROUNDS: int = 10

    # CORS origins - allows the React client to call the API from the browser
    # The client runs on port 3000 in development
    # Can be string (comma-separated) or list for flexibility
    CORS_ORIGINS: Union[str, list[str]] = "http://localhost:3000"

    # Logging level for the coursehub loggers (DEBUG, INFO, WARNING, ...)
    LOG_LEVEL: str = "INFO"
    # One line per request: method, path, status, duration
    LOG_REQUESTS: bool = True

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS string into list"""
        # Handle both string and list formats for flexibility
        # If CORS_ORIGINS is a string, split by comma and strip whitespace
        if isinstance(self.CORS_ORIGINS, str):
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        # If already a list, return it; otherwise return empty list
        return self.CORS_ORIGINS if isinstance(self.CORS_ORIGINS, list) else []

    class Config:
        # Load settings from .env file if it exists
        # Environment variables override defaults
        env_file = ".env"
        case_sensitive = True  # Environment variable names are case-sensitive


settings = Settings()
