import re
from typing import Optional
from urllib.parse import quote_plus

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# scheme://user:password@ -> groups the part up to the user name
CREDENTIALS_REGEX = re.compile(r"^([a-z+]+://[^:/@]+):[^@]*@")


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Values come from the process environment first and from a `.env` file in
    the working directory second. The MongoDB URI is assembled from the
    credential parts unless DATABASE_URL is given explicitly.
    """

    model_config = SettingsConfigDict(env_file='./.env', extra='ignore')

    # MONGODB

    DB_USER: str = ""
    DB_PASS: str = ""
    DB_HOST: str = "cluster0.s6qv7.mongodb.net"
    DB_NAME: str = "coffeeDB"

    COFFEE_COLLECTION: str = "coffee"
    USER_COLLECTION: str = "user"

    DB_TIMEOUT_MS: int = 30000

    DATABASE_URL: Optional[str] = None

    @model_validator(mode='after')
    def assemble_db_connection(self) -> 'AppConfig':
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f"mongodb+srv://{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASS)}"
                f"@{self.DB_HOST}/?retryWrites=true&w=majority&appName=Cluster0"
            )
        return self

    # SERVER

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Logging
    LOG_LEVEL: str = "INFO"  # can be: TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


def redact_uri(uri: str) -> str:
    """
    Hide the password part of a MongoDB URI so it can be logged.

    Args:
        uri: A mongodb:// or mongodb+srv:// connection string.
    Returns:
        The same URI with the password replaced by '***'.
    """
    return CREDENTIALS_REGEX.sub(r"\1:***@", uri, count=1)


# Singleton instance of application configuration
app_config = AppConfig()
