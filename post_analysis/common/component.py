from __future__ import annotations

import logging
from contextlib import AsyncExitStack
from typing import Any, ClassVar, Generic

import aioboto3
from pydantic import ValidationError

from post_analysis.common.config import TConf
from post_analysis.common.errors import ConfigError, NotConnectedError

logger = logging.getLogger(__name__)


class ComponentFactory(Generic[TConf]):
    """Base class for configurable components."""

    # This is a class variable that will be set by subclasses
    _config_type: type[TConf]
    _instance_config: TConf

    def __init__(self, config: TConf) -> None:
        """Initialize with configuration."""
        self._instance_config = config

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ComponentFactory:
        """Create a component from a configuration dictionary."""
        try:
            return cls(cls._config_type(**config))
        except ValidationError as e:
            raise ConfigError(f"Invalid {cls.__name__} configuration: {e}") from e

    @property
    def config(self) -> TConf:
        """Access the configuration."""
        return self._instance_config


class ServiceComponent(ComponentFactory[TConf]):
    """Component holding one long-lived aioboto3 client.

    The client is opened by ``connect`` and stays open until ``close``, so a
    single handle is shared by every request the service handles.
    """

    _service_name: ClassVar[str]

    def __init__(self, config: TConf) -> None:
        super().__init__(config)
        self._client: Any | None = None
        self._stack: AsyncExitStack | None = None

    @property
    def client(self) -> Any:
        """Get the connected service client."""
        if self._client is None:
            raise NotConnectedError(f"Not connected to {self._service_name}")
        return self._client

    async def connect(self) -> None:
        """Open the service client."""
        if self._client is not None:
            return

        session = aioboto3.Session(region_name=self.config.region)
        stack = AsyncExitStack()
        self._client = await stack.enter_async_context(
            session.client(self._service_name, endpoint_url=self.config.endpoint_url)
        )
        self._stack = stack
        logger.info(f"Connected to {self._service_name} in {self.config.region}")

    async def close(self) -> None:
        """Close the service client."""
        try:
            if self._stack:
                await self._stack.aclose()
        except Exception as e:
            logger.error(f"failed to close {self._service_name} client: {e}")
        finally:
            self._stack = None
            self._client = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit, cleanup resources."""
        await self.close()
