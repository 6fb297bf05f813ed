"""
Durable store adapters.

The friends state core only needs an async string-keyed blob store. This
module defines that contract as a Protocol and provides the Redis-backed
implementation used in production.

Usage:
    from friendship.services.storage import RedisDurableStore

    store = await RedisDurableStore.connect()
    await store.set("friends", "[]")
    raw = await store.get("friends")   # "[]" or None if never written
"""
import logging
from typing import Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from friendship.config.redis import get_redis
from friendship.services.exceptions import StorageError
from friendship.services.metrics import store_latency

logger = logging.getLogger(__name__)


class DurableStore(Protocol):
    """
    Interface for the durable key-value store.

    A missing key returns None, which is a different state from a stored
    empty value. Implementations raise StorageError on I/O failure.
    """

    async def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under key.

        Args:
            key: Storage key (e.g., "friends")

        Returns:
            Stored text, or None if the key was never written
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """
        Write a blob under key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized text
        """
        ...


class RedisDurableStore:
    """DurableStore implementation backed by plain Redis string keys."""

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    async def connect(cls) -> "RedisDurableStore":
        """Build a store on top of the shared application Redis client."""
        return cls(await get_redis())

    async def get(self, key: str) -> Optional[str]:
        try:
            with store_latency.labels(operation="get").time():
                value = await self._client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed for key {key}: {e}")
            raise StorageError(f"Failed to read {key}") from e

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            with store_latency.labels(operation="set").time():
                await self._client.set(key, value)
        except RedisError as e:
            logger.error(f"Redis SET failed for key {key}: {e}")
            raise StorageError(f"Failed to write {key}") from e
        logger.debug(f"Stored {len(value)} chars under {key}")
