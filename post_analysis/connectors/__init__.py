from .config import PubSubConfig, StorageConfig
from .pubsub import Publisher
from .storage import StorageConnector

__all__ = ["PubSubConfig", "Publisher", "StorageConfig", "StorageConnector"]
