"""A time-limited cache of tool outputs."""

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from cachetools import TTLCache

from kowalski.tools.base import ToolInput, ToolOutput


class Storage(Enum):
    """Where cached outputs are kept; only memory storage holds entries."""

    MEMORY = "memory"
    LOCAL = "local"
    NONE = "none"


@dataclass
class CacheConfig:
    """Lifetime, storage and size limits of a cache."""

    ttl: float = 3600.0
    storage: Storage = Storage.MEMORY
    max_size: int = 1000


class ToolCache:
    """Caches tool outputs by input for a limited time."""

    def __init__(self, timer: Callable[[], float] = time.monotonic) -> None:
        self.config = CacheConfig()
        self.storage = Storage.MEMORY
        self._timer = timer
        self._memory = self._new_memory()

    def _new_memory(self) -> TTLCache:
        return TTLCache(
            maxsize=self.config.max_size, ttl=self.config.ttl, timer=self._timer
        )

    def with_ttl(self, ttl: float) -> ToolCache:
        """Use a new lifetime in seconds, starting with an empty cache."""
        self.config.ttl = ttl
        self._memory = self._new_memory()
        return self

    def with_storage(self, storage: Storage) -> ToolCache:
        """Switch the storage backend."""
        self.storage = storage
        return self

    def get(self, key: ToolInput) -> ToolOutput | None:
        """Return the cached output for an input, if present and fresh."""
        if self.storage is Storage.MEMORY:
            return self._memory.get(str(key))
        return None

    def set(self, key: ToolInput, output: ToolOutput) -> None:
        """Store an output for an input."""
        if self.storage is Storage.MEMORY:
            self._memory[str(key)] = output

    def cache_key(self, tool_input: ToolInput) -> str:
        """Return a stable key derived from the input's query and context."""
        digest = hashlib.sha256()
        digest.update(tool_input.query.encode("utf-8"))
        digest.update(b"\x00")
        if tool_input.context is not None:
            digest.update(b"\x01" + tool_input.context.encode("utf-8"))
        return f"tool_cache_{digest.hexdigest()}"