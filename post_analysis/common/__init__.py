from .config import BaseConfig, LoggingConfig, RootConfig, ServerConfig, load_config
from .errors import (
    AnalysisError,
    ConfigError,
    LanguageError,
    MalformedResponseError,
    NotConnectedError,
    PublishError,
    StorageError,
    TopicNotFoundError,
)

__all__ = [
    "AnalysisError",
    "BaseConfig",
    "ConfigError",
    "LanguageError",
    "LoggingConfig",
    "MalformedResponseError",
    "NotConnectedError",
    "PublishError",
    "RootConfig",
    "ServerConfig",
    "StorageError",
    "TopicNotFoundError",
    "load_config",
]
