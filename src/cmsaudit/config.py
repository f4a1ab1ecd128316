"""
Configuration for the Contentful audit utilities.

Reads environment variables (optionally from a .env file in the working
directory) into frozen dataclasses. Nothing is read at import time; call
load_settings() where configuration is needed.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_CONTENTFUL_API_URL = "https://api.contentful.com"
DEFAULT_SMUGMUG_API_HOST = "api.smugmug.com"


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class ContentfulConfig:
    management_token: str = ""
    space_id: str = ""
    environment: str = "master"
    api_url: str = DEFAULT_CONTENTFUL_API_URL
    page_size: int = 1000
    timeout: int = 30  # seconds

    @property
    def missing(self) -> list[str]:
        """Names of required environment variables that are not set."""
        missing = []
        if not self.management_token:
            missing.append("CONTENTFUL_MANAGEMENT_TOKEN")
        if not self.space_id:
            missing.append("CONTENTFUL_SPACE_ID")
        return missing


@dataclass(frozen=True)
class SmugMugConfig:
    api_host: str = DEFAULT_SMUGMUG_API_HOST
    user_agent: str = "Contentful-Scraper/1.0"
    timeout: int = 10  # seconds


@dataclass(frozen=True)
class Settings:
    contentful: ContentfulConfig = field(default_factory=ContentfulConfig)
    smugmug: SmugMugConfig = field(default_factory=SmugMugConfig)

    def require_contentful(self) -> ContentfulConfig:
        """
        Return the Contentful configuration, checking required values.

        Raises:
            ConfigError: If the token or space ID is missing
        """
        if self.contentful.missing:
            raise ConfigError(
                f"Missing environment variables: {', '.join(self.contentful.missing)}"
            )
        return self.contentful


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def load_settings(env_file: str | Path | None = ".env") -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional .env file; variables already set in the
            environment take precedence

    Returns:
        Settings populated from the environment
    """
    if env_file is not None:
        load_dotenv(env_file)

    timeout = _int_env("CMSAUDIT_TIMEOUT", 0)

    contentful = ContentfulConfig(
        management_token=os.getenv("CONTENTFUL_MANAGEMENT_TOKEN", ""),
        space_id=os.getenv("CONTENTFUL_SPACE_ID", ""),
        environment=os.getenv("CONTENTFUL_ENVIRONMENT") or "master",
        api_url=(os.getenv("CONTENTFUL_API_URL") or DEFAULT_CONTENTFUL_API_URL).rstrip("/"),
        page_size=_int_env("CONTENTFUL_PAGE_SIZE", 1000),
        timeout=timeout or 30,
    )

    smugmug = SmugMugConfig(
        api_host=os.getenv("SMUGMUG_API_HOST") or DEFAULT_SMUGMUG_API_HOST,
        timeout=timeout or 10,
    )

    return Settings(contentful=contentful, smugmug=smugmug)
