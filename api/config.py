"""
API configuration settings.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Books API"
    api_version: str = "1.0.0"
    api_description: str = "API for managing books"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3000
    public_host: str = "localhost"
    debug: bool = False

    # Documentation
    docs_path: str = "/swagger-ui.html"
    openapi_path: str = "/openapi.json"

    # CORS Settings
    cors_origins: list = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list = ["*"]
    cors_allow_headers: list = ["*"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    log_file: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        """Ensure port is a usable TCP port."""
        if v < 1 or v > 65535:
            raise ValueError('port must be between 1 and 65535')
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    @field_validator('docs_path', 'openapi_path')
    @classmethod
    def validate_path(cls, v):
        """Documentation paths are absolute URL paths."""
        if not v.startswith('/'):
            raise ValueError('documentation paths must start with "/"')
        return v

    @property
    def public_url(self) -> str:
        """Base URL the server is reachable at, used for logs and the OpenAPI servers list."""
        return f"http://{self.public_host}:{self.port}"

    @property
    def docs_url(self) -> str:
        """Absolute URL of the Swagger UI page."""
        return f"{self.public_url}{self.docs_path}"


# Global config instance
config = APIConfig()
