"""Key-value store with factory for creating instances from configuration."""

from urllib.parse import urlparse

from loguru import logger

from ..config import Settings, settings
from .dynamodb import DynamoDBKVStore, parse_dynamodb_url
from .memory import InMemoryKVStore
from .protocols import KVStore
from .redis import RedisKVStore

TREE_KEY = "TREE"


def create_kv_store(store_url: str | None = None, config: Settings | None = None) -> KVStore:
    """Create key-value store instance based on URL scheme.

    Args:
        store_url: Store URL. Uses settings if not provided.
        config: Settings to read the effective store URL from.

    Returns:
        KVStore instance.
    """
    url = store_url or (config or settings).effective_store_url
    scheme = urlparse(url).scheme

    if scheme in ("redis", "rediss", "unix"):
        logger.info("Creating Redis page cache")
        return RedisKVStore(url)
    if scheme == "dynamodb":
        logger.info("Creating DynamoDB page cache")
        return DynamoDBKVStore.from_url(url)
    if scheme == "memory":
        logger.info("Creating in-memory page cache")
        return InMemoryKVStore()
    raise ValueError(f"Unsupported store URL scheme: {scheme!r}")


__all__ = [
    "TREE_KEY",
    "DynamoDBKVStore",
    "InMemoryKVStore",
    "KVStore",
    "RedisKVStore",
    "create_kv_store",
    "parse_dynamodb_url",
]
