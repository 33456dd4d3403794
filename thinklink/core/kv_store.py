"""Synchronous key-value stores used to persist model weights."""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from redis import Redis
from redis.exceptions import RedisError

from thinklink.core.config import Settings, settings
from thinklink.core.errors import StorageError


logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Durable string key-value store (whole-value reads and writes)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStore:
    """Thread-safe in-memory store, lost when the process exits."""

    def __init__(self) -> None:
        """Initialize in-memory store."""
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        """Get value from store.

        Args:
            key: Store key

        Returns:
            Stored value or None if not found
        """
        with self._lock:
            value = self._data.get(key)
            if value is not None:
                logger.debug("Store hit for key: %s", key)
            return value

    def set(self, key: str, value: str) -> None:
        """Set value in store.

        Args:
            key: Store key
            value: Value to store
        """
        with self._lock:
            self._data[key] = value
            logger.debug("Stored key: %s", key)

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        with self._lock:
            self._data.pop(key, None)


class FileStore:
    """Store backed by a single JSON document on local disk.

    Every write rewrites the whole document through a temporary file and an
    atomic replace, so readers never observe a partially written file.
    """

    def __init__(self, path: Path) -> None:
        """Initialize file store.

        Args:
            path: Location of the JSON document (created on first write)
        """
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read store file {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Store file {self._path} does not contain a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle)
            os.replace(tmp_name, self._path)
        except OSError as e:
            raise StorageError(f"Failed to write store file {self._path}: {e}") from e

    def get(self, key: str) -> str | None:
        """Get value from the JSON document.

        Raises:
            StorageError: If the file cannot be read or parsed
        """
        with self._lock:
            value = self._read_all().get(key)
            return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Set value and rewrite the JSON document.

        Raises:
            StorageError: If the file cannot be written
        """
        with self._lock:
            try:
                data = self._read_all()
            except StorageError:
                logger.warning("Store file %s unreadable, starting a fresh document", self._path)
                data = {}
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        """Remove a key and rewrite the JSON document if it was present."""
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)


class RedisStore:
    """Store backed by a synchronous Redis connection."""

    def __init__(self, url: str, *, client: Redis | None = None) -> None:
        """Initialize Redis store.

        Args:
            url: Redis connection URL
            client: Pre-built client (mainly for tests)
        """
        self._client = client or Redis.from_url(url, decode_responses=True)
        logger.info("Redis store initialized with URL: %s", url)

    def get(self, key: str) -> str | None:
        """Get value from Redis.

        Raises:
            StorageError: If Redis is unreachable
        """
        try:
            return self._client.get(key)
        except RedisError as e:
            raise StorageError(f"Redis GET failed for {key}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Set value in Redis.

        Raises:
            StorageError: If Redis is unreachable
        """
        try:
            self._client.set(key, value)
        except RedisError as e:
            raise StorageError(f"Redis SET failed for {key}: {e}") from e

    def remove(self, key: str) -> None:
        """Delete a key from Redis.

        Raises:
            StorageError: If Redis is unreachable
        """
        try:
            self._client.delete(key)
        except RedisError as e:
            raise StorageError(f"Redis DEL failed for {key}: {e}") from e


def build_store(config: Settings = settings) -> KeyValueStore:
    """Pick the store backend from settings: redis, then file, then memory."""
    if config.redis_url:
        return RedisStore(config.redis_url)
    if config.weights_store_path is not None:
        logger.info("Using file store at %s", config.weights_store_path)
        return FileStore(config.weights_store_path)
    logger.info("No durable store configured. Weights are kept in memory only.")
    return InMemoryStore()
