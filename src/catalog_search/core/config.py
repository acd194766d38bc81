"""
Catalog Search Configuration

Environment-driven settings shared by the build CLI and the HTTP service.
"""

import os
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Application environment"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"
    TEST = "test"


def _get_environment() -> Environment:
    """Get and validate ENVIRONMENT variable (defaults to development)."""
    env_value = os.getenv("ENVIRONMENT", Environment.DEVELOPMENT.value)
    try:
        return Environment(env_value.lower())
    except ValueError:
        raise RuntimeError(
            f"Invalid ENVIRONMENT value: '{env_value}'. "
            "Must be 'production', 'development', or 'test'."
        )


class Settings:
    """Catalog search configuration"""

    # Project Paths
    BASE_DIR: Path = Path(os.getenv("CATALOG_BASE_DIR", os.getcwd()))
    CONTENT_DIR: Path = Path(os.getenv("CONTENT_DIR", str(BASE_DIR / "content")))
    INDEX_PATH: Path = Path(
        os.getenv("INDEX_PATH", str(BASE_DIR / "public" / "search-data.json"))
    )

    # Index fetch (session load)
    INDEX_URL: str = os.getenv("INDEX_URL", "http://localhost:8000/search-data.json")
    INDEX_FETCH_TIMEOUT_SEC: float = float(os.getenv("INDEX_FETCH_TIMEOUT_SEC", "10"))

    # Search Settings
    MAX_QUERY_LEN: int = int(os.getenv("MAX_QUERY_LEN", "200"))

    # Rate Limits (slowapi notation)
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    SEARCH_API_RATE_LIMIT: str = os.getenv("SEARCH_API_RATE_LIMIT", "100/minute")
    SEARCH_FRAGMENT_RATE_LIMIT: str = os.getenv("SEARCH_FRAGMENT_RATE_LIMIT", "60/minute")

    # Security
    CORS_ORIGINS: list[str] = (
        os.getenv("CORS_ORIGINS", "").split(",") if os.getenv("CORS_ORIGINS") else []
    )

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Environment
    ENVIRONMENT: Environment = _get_environment()


settings = Settings()
