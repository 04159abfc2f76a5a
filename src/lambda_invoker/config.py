"""
Configuration Management for the Lambda Invoker

This module handles environment-based configuration using .env files and
provides centralized access to the settings used to build invokers.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from .core.envelopes import InvocationType


logger = logging.getLogger(__name__)


@dataclass
class TransportConfig:
    """Transport-related configuration."""
    endpoint_url: str = "http://127.0.0.1:9001"
    timeout_seconds: float = 30.0


@dataclass
class InvokerConfig:
    """Invocation defaults."""
    function_name: str = ""
    invocation_type: InvocationType = InvocationType.REQUEST_RESPONSE
    qualifier: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config:
    """
    Centralized configuration management.

    Loads configuration from environment variables and .env files.
    """

    def __init__(self, env_file: str = ".env"):
        """
        Initialize configuration.

        Args:
            env_file: Path to .env file (optional)
        """
        self.env_file = env_file
        self._load_env_file()
        self._initialize_configs()

    def _load_env_file(self):
        """Load environment variables from .env file if present."""
        if os.path.exists(self.env_file):
            load_dotenv(self.env_file)

    def _get_env(self,
                 key: str,
                 default: Any,
                 type_cast: Callable[[Any], Any] = str,
                 validate: Optional[Callable[[Any], bool]] = None) -> Any:
        """
        Get an environment variable, cast and checked.

        Unset, uncastable or rejected values fall back to default.
        """
        raw = os.environ.get(key)
        if raw is None:
            return default

        try:
            value = type_cast(raw)
        except (ValueError, TypeError):
            logger.warning(f"Ignoring {key}={raw!r}: cannot be read as {_type_name(type_cast)}")
            return default

        if validate is not None and not validate(value):
            logger.warning(f"Ignoring {key}={raw!r}: out of range")
            return default
        return value

    def _initialize_configs(self):
        """Initialize all configuration sections."""
        self.transport = TransportConfig(
            endpoint_url=self._get_env("LAMBDA_ENDPOINT_URL", "http://127.0.0.1:9001"),
            timeout_seconds=self._get_env(
                "LAMBDA_TIMEOUT_SECONDS", 30.0, float, validate=lambda v: 0 < v < float("inf")
            )
        )

        self.invoker = InvokerConfig(
            function_name=self._get_env("LAMBDA_FUNCTION_NAME", ""),
            invocation_type=self._get_env(
                "LAMBDA_INVOCATION_TYPE", InvocationType.REQUEST_RESPONSE, InvocationType
            ),
            qualifier=self._get_env("LAMBDA_QUALIFIER", "") or None
        )

        self.logging = LoggingConfig(
            level=self._get_env("LOG_LEVEL", "WARNING"),
            format=self._get_env("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    def configure_logging(self, level: Optional[str] = None):
        """Set up root logging from the logging section."""
        logging.basicConfig(
            level=getattr(logging, (level or self.logging.level).upper(), logging.WARNING),
            format=self.logging.format
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for debugging."""
        invoker = dict(self.invoker.__dict__)
        invoker["invocation_type"] = self.invoker.invocation_type.value
        return {
            "transport": self.transport.__dict__,
            "invoker": invoker,
            "logging": self.logging.__dict__
        }


def _type_name(type_cast) -> str:
    return getattr(type_cast, "__name__", repr(type_cast))


# Global configuration instance
config = Config()
