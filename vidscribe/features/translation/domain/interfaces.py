from abc import ABC, abstractmethod
from typing import Optional
from .models import CacheKey, ProbeResult, TranslationResult


class ITranslationClient(ABC):
    """
    Contract for talking to one translation endpoint at a time.
    Implementations are blocking; the gateway runs them in worker threads.
    """

    @abstractmethod
    def probe(self, url: str, timeout: float) -> ProbeResult:
        """Lightweight availability check. Never raises."""
        pass

    @abstractmethod
    def translate(self, url: str, text: str, source: str, target: str, timeout: float) -> TranslationResult:
        """
        Raises:
            EndpointError: On any failure of this endpoint.
        """
        pass


class ITranslationCache(ABC):
    @abstractmethod
    def get(self, key: CacheKey) -> Optional[TranslationResult]:
        """Returns a fresh result, or None on miss or expiry."""
        pass

    @abstractmethod
    def set(self, key: CacheKey, result: TranslationResult) -> None:
        pass

    @abstractmethod
    def clear(self) -> int:
        pass
