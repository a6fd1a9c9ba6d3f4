import logging
import time
from threading import Lock
from typing import Callable, Dict, Optional
from vidscribe.core.config.settings import settings
from ..domain.interfaces import ITranslationCache
from ..domain.models import CacheKey, TranslationCacheEntry, TranslationResult

logger = logging.getLogger(__name__)


class TranslationMemoryCache(ITranslationCache):
    """
    Thread-safe in-memory cache keyed by (text, source, target).

    Entries go stale after the TTL but are never evicted; the dict grows
    with the number of distinct texts translated in this process.
    """

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.time):
        self._entries: Dict[CacheKey, TranslationCacheEntry] = {}
        self._lock = Lock()
        self._ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.TRANSLATION_CACHE_TTL
        self._clock = clock

    def get(self, key: CacheKey) -> Optional[TranslationResult]:
        with self._lock:
            entry = self._entries.get(key)

        if entry is None or entry.is_expired(self._clock(), self._ttl_seconds):
            return None
        return entry.result

    def set(self, key: CacheKey, result: TranslationResult) -> None:
        entry = TranslationCacheEntry(result=result, inserted_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Translation cache cleared ({count} entries)")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
