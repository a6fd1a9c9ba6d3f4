# File: vidscribe/features/translation/domain/models.py
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# Caller codes -> endpoint codes. Unknown codes pass through unchanged.
LANGUAGE_CODES: Dict[str, str] = {
    "en": "en",
    "zh": "zh",
    "ja": "ja",
    "ko": "ko",
    "es": "es",
    "fr": "fr",
    "de": "de",
    "it": "it",
    "pt": "pt",
    "ru": "ru",
    "others": "auto",  # endpoint auto-detects
}

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "zh": "中文",
    "ja": "日本語",
    "ko": "한국어",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "it": "Italiano",
    "pt": "Português",
    "ru": "Русский",
    "others": "Others",
}

CacheKey = Tuple[str, str, str]


def to_endpoint_code(code: str) -> str:
    return LANGUAGE_CODES.get(code, code)


@dataclass(frozen=True)
class TranslationResult:
    """
    `confidence` is the endpoint's source-language detection confidence,
    not a translation quality score.
    """
    translated_text: str
    detected_language: Optional[str] = None
    confidence: Optional[float] = None


@dataclass(frozen=True)
class ProbeResult:
    url: str
    available: bool
    latency: float = float("inf")


@dataclass(frozen=True)
class TranslationCacheEntry:
    result: TranslationResult
    inserted_at: float

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        return now - self.inserted_at >= ttl_seconds
