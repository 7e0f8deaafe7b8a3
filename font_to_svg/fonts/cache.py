"""Font resource cache.

Keeps parsed FontAssets keyed by font key under a total byte budget (the
source file sizes). When a new font would push the total over the ceiling,
least recently used entries are evicted first. A single font larger than the
ceiling is still admitted once everything else has been evicted.

Loads are single-flight per key: concurrent misses on the same key wait for
one load instead of parsing the file several times. Eviction and insertion
happen together under the cache lock, so the running byte total always
equals the sum of the entry sizes when observed from outside a load.

The cache is an ordinary object: construct one at startup and pass it to
whatever serves requests.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from font_to_svg.config import DEFAULT_CACHE_MAX_BYTES, Config
from font_to_svg.fonts.asset import FontAsset, load_font
from font_to_svg.fonts.resolver import FontResolver

logger = logging.getLogger(__name__)

DEFAULT_FONT_KEY = "default"


def format_bytes(size: int) -> str:
    """Human-readable byte count, e.g. 1536 -> '1.5 KB'."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    return f"{round(value, 2):g} {units[i]}"


@dataclass
class _KeyLock:
    """Per-key load lock and the number of threads holding a reference to it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    waiters: int = 0


@dataclass
class CachedFont:
    asset: FontAsset
    size: int
    last_accessed: float
    path: Path


@dataclass(frozen=True)
class CacheEntryStats:
    key: str
    size: int
    last_accessed: datetime


@dataclass(frozen=True)
class CacheStats:
    count: int
    total_bytes: int
    max_bytes: int
    usage_percent: float
    entries: list[CacheEntryStats] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "totalBytes": self.total_bytes,
            "maxBytes": self.max_bytes,
            "usagePercent": self.usage_percent,
            "perEntry": [
                {
                    "key": e.key,
                    "size": e.size,
                    "lastAccessed": e.last_accessed.isoformat(),
                }
                for e in self.entries
            ],
        }


class FontCache:
    """LRU cache of parsed fonts bounded by total source size."""

    def __init__(
        self,
        resolver: FontResolver,
        max_bytes: int = DEFAULT_CACHE_MAX_BYTES,
        loader: Callable[[Path], FontAsset] = load_font,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.resolver = resolver
        self.max_bytes = max_bytes
        self._loader = loader
        self._clock = clock
        # insertion order == access order; least recently used first
        self._entries: OrderedDict[str, CachedFont] = OrderedDict()
        self._total_bytes = 0
        self._lock = threading.Lock()
        # dropped once no thread is waiting, so the map only holds in-flight loads
        self._key_locks: dict[str, _KeyLock] = {}

    @classmethod
    def from_config(cls, config: Config) -> FontCache:
        return cls(FontResolver.from_config(config), max_bytes=config.cache_max_bytes)

    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def acquire(self, font_key: str | None = None) -> FontAsset:
        """Return the parsed font for a key, loading it on a miss.

        Args:
            font_key: Font file key relative to the font roots; None for the
                bundled default font.

        Returns:
            The cached FontAsset.

        Raises:
            FontNotFoundError: If the key resolves to no file.
            FontParseError: If the file is not a valid font.
        """
        cache_key = font_key or DEFAULT_FONT_KEY

        with self._lock:
            asset = self._hit(cache_key)
            if asset is not None:
                return asset
            key_lock = self._key_locks.setdefault(cache_key, _KeyLock())
            key_lock.waiters += 1

        try:
            with key_lock.lock:
                with self._lock:
                    asset = self._hit(cache_key)
                    if asset is not None:
                        return asset
                return self._load(cache_key, font_key)
        finally:
            with self._lock:
                key_lock.waiters -= 1
                if key_lock.waiters == 0:
                    del self._key_locks[cache_key]

    def _hit(self, cache_key: str) -> FontAsset | None:
        entry = self._entries.get(cache_key)
        if entry is None:
            return None
        entry.last_accessed = self._clock()
        self._entries.move_to_end(cache_key)
        logger.debug("Font cache hit: %s", cache_key)
        return entry.asset

    def _load(self, cache_key: str, font_key: str | None) -> FontAsset:
        font_path = self.resolver.resolve(font_key)
        size = font_path.stat().st_size
        asset = self._loader(font_path)

        with self._lock:
            if self._total_bytes + size > self.max_bytes:
                self._evict(size)
            self._entries[cache_key] = CachedFont(
                asset=asset,
                size=size,
                last_accessed=self._clock(),
                path=font_path,
            )
            self._total_bytes += size
            total = self._total_bytes

        logger.info(
            "Font cached: %s (%s), total cache size: %s",
            cache_key,
            format_bytes(size),
            format_bytes(total),
        )
        if size > self.max_bytes:
            logger.warning(
                "Font %s (%s) exceeds the cache ceiling of %s",
                cache_key,
                format_bytes(size),
                format_bytes(self.max_bytes),
            )
        return asset

    def _evict(self, required: int) -> None:
        """Drop least recently used entries until `required` bytes fit. Caller holds the lock."""
        while self._entries and self._total_bytes + required > self.max_bytes:
            key, entry = self._entries.popitem(last=False)
            self._total_bytes -= entry.size
            logger.info("Evicted font from cache: %s (%s)", key, format_bytes(entry.size))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_bytes = 0
        logger.info("Font cache cleared")

    def stats(self) -> CacheStats:
        with self._lock:
            entries = [
                CacheEntryStats(
                    key=key,
                    size=entry.size,
                    last_accessed=datetime.fromtimestamp(entry.last_accessed, tz=timezone.utc),
                )
                for key, entry in self._entries.items()
            ]
            total = self._total_bytes
        return CacheStats(
            count=len(entries),
            total_bytes=total,
            max_bytes=self.max_bytes,
            usage_percent=total / self.max_bytes * 100,
            entries=entries,
        )
