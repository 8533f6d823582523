"""
Application Configuration Module.

Manages application settings and environment variables using Pydantic for validation.
Provides centralized configuration management with type safety and validation.

Features:
- Environment variable loading and validation
- Secure credential management
- Page-size limits for the GraphQL pull request query
- Path normalization for the output directory
"""

import os
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logger import LogManager


class Settings(BaseSettings):
    """
    Application configuration settings with validation.

    Attributes:
        app_name (str): Name of the application
        dev (bool): Development mode flag (readable console logs)
        log_dir (str): Directory for log files
        log_level (int): Logging level (default: info)
        github_token (Optional[SecretStr]): Fallback token when a request carries none
        github_graphql_url (str): GitHub GraphQL endpoint
        pr_page_size (int): Pull requests requested per page
        comment_limit (int): Comments requested per pull request
        review_limit (int): Reviews requested per pull request
        file_limit (int): Changed files requested per pull request
        request_timeout (float): HTTP timeout in seconds
        base_dir (str): Base directory for output files
        output_subdir (str): Directory under base_dir holding the JSON documents
        host (str): HTTP bind address
        port (int): HTTP port
        include_prs_in_response (bool): Return the records in the HTTP response
        require_token (bool): Reject requests that carry no token
    """

    # Application settings
    app_name: str = Field(default="PRHarvester", description="Application name")
    dev: bool = Field(default=False, description="Development mode")
    log_dir: str = Field(default="logs", description="Logging directory")
    log_level: int = Field(default=20, description="Logging level, default info")

    # GitHub configuration
    github_token: Optional[SecretStr] = Field(
        default=None, description="GitHub token used when a request has none"
    )
    github_graphql_url: str = Field(
        default="https://api.github.com/graphql", description="GitHub GraphQL URL"
    )

    # Query limits. Sub-connections are truncated at these counts, so PRs with
    # more activity are under-represented in the output.
    pr_page_size: int = Field(default=100, ge=1, le=100)
    comment_limit: int = Field(default=5, ge=1, le=100)
    review_limit: int = Field(default=5, ge=1, le=100)
    file_limit: int = Field(default=10, ge=1, le=100)
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout")

    # Output configuration
    base_dir: str = Field(default=".", description="Base output directory")
    output_subdir: str = Field(default="fetched-prs", description="Output folder")

    # HTTP server
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=4000, description="HTTP port")
    include_prs_in_response: bool = Field(
        default=True, description="Return records alongside the file path"
    )
    require_token: bool = Field(
        default=False, description="Reject requests without a token"
    )

    @property
    def token(self) -> Optional[str]:
        """
        Get the configured GitHub token as plain text.

        Returns:
            Optional[str]: Token value, or None when not configured
        """
        if self.github_token is None:
            return None
        return self.github_token.get_secret_value() or None

    @field_validator("base_dir")
    def ensure_absolute_path(cls, v: str) -> str:
        """
        Ensure base directory path is absolute.

        Converts relative paths to absolute paths based on current working directory.

        Args:
            v (str): Directory path to validate

        Returns:
            str: Absolute path to the base directory
        """
        if not os.path.isabs(v):
            return os.path.abspath(v)
        return v

    # Configure env file loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )


# Create global settings instance
settings = Settings()

# Initialize logging configuration
logger = LogManager(
    app_name=settings.app_name.lower(),
    log_dir=settings.log_dir,
    development=settings.dev,
    level=settings.log_level,
).logger
