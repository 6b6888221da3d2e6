"""
Configuration management for PropUnit.
Loads settings from YAML configuration files.
"""

import os

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from YAML config files."""

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_debug: bool = Field(default=True, alias="APP_DEBUG")

    # Logging Configuration
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file_path: str = Field(default="logs/app.log", alias="LOG_FILE_PATH")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    log_max_bytes: int = Field(default=50 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 50MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")
    log_requests: bool = Field(default=False, alias="LOG_REQUESTS")

    # API Configuration
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    api_title: str = Field(default="PropUnit Unit Numbering API", alias="API_TITLE")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"], alias="CORS_ORIGINS"
    )

    # Unit numbering
    numbering_max_existing_units: int = Field(
        default=1000, alias="NUMBERING_MAX_EXISTING_UNITS"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "allow"
        populate_by_name = True

    @property
    def use_json_logs(self) -> bool:
        return self.log_format.lower() == "json"

    @classmethod
    def from_yaml(cls, config_path: str) -> "Settings":
        """Load settings from YAML file."""
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
        return cls(**config_data)


def get_settings() -> Settings:
    """Get settings instance - requires CONFIG environment variable.

    Raises:
        ValueError: If CONFIG environment variable is not set
        FileNotFoundError: If config file doesn't exist
    """
    config_path = os.getenv("CONFIG")

    if not config_path:
        raise ValueError(
            "CONFIG environment variable is not set!\n"
            "\n"
            "Please set it to your configuration file path:\n"
            "  export CONFIG=resources/config/local.yaml"
        )

    if not os.path.exists(config_path):
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please check the CONFIG environment variable points to a valid file."
        )

    return Settings.from_yaml(config_path)


# Load settings at import time
settings = get_settings()
