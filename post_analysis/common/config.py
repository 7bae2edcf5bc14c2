"""Common configuration classes."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from post_analysis.common.errors import ConfigError

DEFAULT_REGION = "eu-central-1"
DEFAULT_PORT = 3000
DEFAULT_CONFIG_PATH = os.path.join("config", "default.yaml")


def default_region() -> str:
    return os.getenv("AWS_REGION", DEFAULT_REGION)


class BaseConfig(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        from_attributes=True,
    )


class AWSServiceConfig(BaseConfig):
    """Settings shared by every AWS-backed component."""

    region: str = Field(
        default_factory=default_region,
        description="AWS region",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint, e.g. for localstack",
    )


class ServerConfig(BaseConfig):
    """HTTP server configuration."""

    host: str = Field(
        default="0.0.0.0",
        description="Interface to bind",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        description="Port to listen on",
        ge=1,
        le=65535,
    )


class LoggingConfig(BaseConfig):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Root log level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format",
    )
    filename: str | None = Field(
        default=None,
        description="Optional rotating log file",
    )
    max_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Rotate the log file after this many bytes",
        ge=1,
    )
    backup_count: int = Field(
        default=5,
        description="Number of rotated files to keep",
        ge=0,
    )

    def configure(self) -> None:
        """Configure the root logger."""
        logging.basicConfig(level=self.level, format=self.format)

        if self.filename:
            handler = RotatingFileHandler(
                filename=self.filename,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
            )
            handler.setFormatter(logging.Formatter(self.format))
            logging.getLogger().addHandler(handler)


class RootConfig(BaseConfig):
    """Root configuration."""

    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP server configuration",
    )
    storage: dict[str, Any] = Field(
        default_factory=dict,
        description="Object storage configuration",
    )
    language: dict[str, Any] = Field(
        default_factory=dict,
        description="Natural-language API configuration",
    )
    pubsub: dict[str, Any] = Field(
        default_factory=dict,
        description="Notification topic configuration",
    )
    logging: LoggingConfig | None = Field(
        default=None,
        description="Logging configuration",
    )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> RootConfig:
        """Validate a raw configuration mapping."""
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise ConfigError(f"Invalid root configuration: {e}") from e


def load_config(path: str | None = None) -> RootConfig:
    """Load the YAML configuration and apply environment overrides."""
    path = path or os.getenv("POST_ANALYSIS_CONFIG", DEFAULT_CONFIG_PATH)
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")

    if port := os.getenv("PORT"):
        config["server"] = {**(config.get("server") or {}), "port": port}

    return RootConfig.from_dict(config)


TConf = TypeVar("TConf", bound=BaseConfig)
