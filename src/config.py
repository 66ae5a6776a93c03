"""
Configuration module for the Graylog reconciler.

Loads connection settings from environment variables. Configuration values
are immutable and are handed explicitly to the transport; nothing here is
kept as module-level state.
"""

import logging
import os
from dataclasses import dataclass, field

DEFAULT_X_REQUESTED_BY = "terraform-provider-graylog"
DEFAULT_TIMEOUT = 30  # seconds

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class GraylogConfig:
    """Graylog API connection configuration."""

    base_url: str
    username: str
    password: str = field(repr=False)  # Never log password
    x_requested_by: str = DEFAULT_X_REQUESTED_BY
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base URL is required")
        if not self.username:
            raise ValueError("username is required")
        if not self.password:
            raise ValueError("password is required")
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")

    @property
    def api_url(self) -> str:
        """Root of the REST API, e.g. https://graylog.example.com/api."""
        return f"{self.base_url.rstrip('/')}/api"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(
            base_url=os.getenv("GRAYLOG_WEB_ENDPOINT_URI", ""),
            username=os.getenv("GRAYLOG_AUTH_NAME", ""),
            password=os.getenv("GRAYLOG_AUTH_PASSWORD", ""),
            x_requested_by=os.getenv("GRAYLOG_X_REQUESTED_BY")
            or DEFAULT_X_REQUESTED_BY,
            timeout=int(os.getenv("GRAYLOG_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )


@dataclass(frozen=True)
class Config:
    """Main configuration object."""

    graylog: GraylogConfig
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            graylog=GraylogConfig.from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def configure_logging(level: str = "INFO") -> None:
    """Apply the standard log format at the given level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
