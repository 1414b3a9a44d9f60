"""
Centralized application configuration.

All tunables are read from environment variables (or a local .env file)
through Pydantic Settings, with defaults suited for operator workstations.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application configuration using Pydantic Settings.
    """

    # === BASIC APP CONFIGURATION ===
    APP_NAME: str = "Plus Shipping CLI"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # === LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # === KUBERNETES ===
    KUBECTL_PATH: str = Field(default="kubectl")
    WORKER_POD_NAME: str = Field(default="temp-mysql-client")
    WORKER_POD_IMAGE: str = Field(default="mysql:8.0")
    WORKER_POD_SLEEP_SECONDS: int = Field(default=36000)
    POD_READY_TIMEOUT_SECONDS: int = Field(default=60)

    # === REMOTE SQL EXECUTION ===
    SQL_STAGING_DIR: str = Field(default="/tmp")
    MYSQL_CHARSET: str = Field(default="utf8mb4")
    DEFAULT_DB_PORT: int = Field(default=3306)

    # === DATA SOURCES ===
    SHOPS_CONFIG_PATH: str = Field(default="config/shops.yaml")
    LOCATIONS_DATA_PATH: str = Field(default=str(PACKAGE_DIR / "data" / "locations.json"))
    SQL_OUTPUT_DIR: str = Field(default="sql-output-store-management")
    # Rollback reports this count when the database does not echo one back
    LOCATION_CATALOG_SIZE: int = Field(default=13)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate that the log level is a standard logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate the runtime environment name."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {valid_envs}")
        return v.lower()

    @field_validator("DEFAULT_DB_PORT")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("DEFAULT_DB_PORT must be between 1 and 65535")
        return v

    @field_validator("POD_READY_TIMEOUT_SECONDS", "WORKER_POD_SLEEP_SECONDS", "LOCATION_CATALOG_SIZE")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v

    @property
    def is_production(self) -> bool:
        """Check whether the tool runs in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get the configuration singleton.

    Returns:
        Settings: Configuration instance
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload the configuration (useful for testing).

    Returns:
        Settings: New configuration instance
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """
    Get information about the current environment.

    Returns:
        dict: Environment information
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "log_level": settings.LOG_LEVEL,
        "kubectl": settings.KUBECTL_PATH,
        "worker_pod": f"{settings.WORKER_POD_NAME} ({settings.WORKER_POD_IMAGE})",
        "shops_config": settings.SHOPS_CONFIG_PATH,
        "locations_data": settings.LOCATIONS_DATA_PATH,
        "sql_output_dir": settings.SQL_OUTPUT_DIR,
    }
