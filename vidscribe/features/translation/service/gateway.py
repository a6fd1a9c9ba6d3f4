import asyncio
import logging
from typing import Dict, List, Optional, Sequence
from vidscribe.core.config.settings import settings
from vidscribe.core.errors import AllEndpointsUnavailableError
from ..data.libretranslate_client import LibreTranslateClient
from ..data.memory_cache import TranslationMemoryCache
from ..domain.errors import EndpointError
from ..domain.interfaces import ITranslationCache, ITranslationClient
from ..domain.models import LANGUAGE_CODES, LANGUAGE_NAMES, TranslationResult, to_endpoint_code

logger = logging.getLogger(__name__)


class TranslationGateway:
    """
    Resilient translation across a pool of redundant endpoints.

    Per request: cache lookup -> probe all endpoints -> rank by latency ->
    try candidates in order, for max_retries rounds with linear backoff.
    The ranking is rebuilt for every request; no endpoint stays preferred
    after a transient outage.
    """

    def __init__(
        self,
        endpoints: Optional[Sequence[str]] = None,
        client: Optional[ITranslationClient] = None,
        cache: Optional[ITranslationCache] = None,
        max_retries: Optional[int] = None,
        probe_timeout: Optional[float] = None,
        call_timeout: Optional[float] = None,
        backoff_seconds: Optional[float] = None
    ):
        self.endpoints = list(endpoints if endpoints is not None else settings.TRANSLATION_ENDPOINTS)
        if not self.endpoints:
            raise ValueError("TranslationGateway needs at least one endpoint.")

        self.client = client if client is not None else LibreTranslateClient()
        self.cache = cache if cache is not None else TranslationMemoryCache()
        self.max_retries = max_retries if max_retries is not None else settings.TRANSLATION_MAX_RETRIES
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be at least 1: {self.max_retries}")
        self.probe_timeout = probe_timeout if probe_timeout is not None else settings.TRANSLATION_PROBE_TIMEOUT
        self.call_timeout = call_timeout if call_timeout is not None else settings.TRANSLATION_CALL_TIMEOUT
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.TRANSLATION_BACKOFF_SECONDS

    async def translate(self, text: str, source_lang: str = "auto", target_lang: str = "en") -> TranslationResult:
        """
        Translates text, serving fresh cache hits without network access.

        Raises:
            AllEndpointsUnavailableError: If every endpoint failed on every attempt.
        """
        key = (text, source_lang, target_lang)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Translation cache hit ({source_lang}->{target_lang})")
            return cached

        source = to_endpoint_code(source_lang)
        target = to_endpoint_code(target_lang)
        candidates = await self._rank_endpoints()

        for attempt in range(self.max_retries):
            for url in candidates:
                try:
                    result = await asyncio.to_thread(
                        self.client.translate, url, text, source, target, self.call_timeout
                    )
                except EndpointError as e:
                    logger.warning(f"Translation failed with endpoint {url} (attempt {attempt + 1}/{self.max_retries}): {e}")
                    continue

                self.cache.set(key, result)
                return result

            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.backoff_seconds * (attempt + 1))

        logger.error(f"All translation endpoints failed ({source_lang}->{target_lang}, {self.max_retries} attempts)")
        raise AllEndpointsUnavailableError(self.endpoints, self.max_retries)

    async def is_available(self) -> bool:
        probes = await self._probe_all()
        return any(p.available for p in probes)

    def clear_cache(self) -> int:
        return self.cache.clear()

    @staticmethod
    def supported_languages() -> List[Dict[str, str]]:
        return [{"code": code, "name": LANGUAGE_NAMES.get(code, code)} for code in LANGUAGE_CODES]

    async def _probe_all(self):
        return await asyncio.gather(*(
            asyncio.to_thread(self.client.probe, url, self.probe_timeout)
            for url in self.endpoints
        ))

    async def _rank_endpoints(self) -> List[str]:
        probes = await self._probe_all()
        available = sorted((p for p in probes if p.available), key=lambda p: p.latency)

        if not available:
            logger.warning("No translation endpoint answered the probe. Falling back to pool order.")
            return list(self.endpoints)

        skipped = len(self.endpoints) - len(available)
        if skipped:
            logger.info(f"{skipped} translation endpoint(s) failed the probe and are skipped for this request")
        return [p.url for p in available]


# Singleton Instance for easy import
translation_gateway = TranslationGateway()
