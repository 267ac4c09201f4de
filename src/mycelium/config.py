"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mycelium.models import NEW_NODE_DESCRIPTION, NEW_NODE_LABEL


class Environment(str, Enum):
    """Deployment environment presets."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Seed document
    seed_document_path: str | None = Field(
        default=None,
        description="JSON document to load at startup (built-in seed if unset)"
    )
    collapse_on_load: bool = Field(
        default=True,
        description="Start with everything below level 1 collapsed"
    )

    # Export
    export_path: str = "mindmap_data.json"
    export_indent: int = 2

    # Defaults for nodes created with add()
    new_node_label: str = NEW_NODE_LABEL
    new_node_description: str = NEW_NODE_DESCRIPTION

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    # Logging
    log_level: str = "INFO"


def get_dev_settings() -> Settings:
    """Get development environment settings."""
    return Settings(
        api_host="127.0.0.1",
        api_debug=True,
        log_level="DEBUG",
    )


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        seed_document_path=None,
        collapse_on_load=True,
        export_path="mindmap_test_export.json",
        log_level="DEBUG",
    )


def get_settings(environment: Environment | str) -> Settings:
    """Get settings for a named environment preset."""
    environment = Environment(environment)
    if environment is Environment.DEV:
        return get_dev_settings()
    if environment is Environment.TEST:
        return get_test_settings()
    return Settings()


# Global settings instance
settings = Settings()
