import logging
import time
import requests
from ..domain.errors import EndpointError
from ..domain.interfaces import ITranslationClient
from ..domain.models import ProbeResult, TranslationResult

logger = logging.getLogger(__name__)


class LibreTranslateClient(ITranslationClient):
    """
    HTTP client for LibreTranslate-compatible /translate endpoints.
    """

    def probe(self, url: str, timeout: float) -> ProbeResult:
        start = time.perf_counter()
        try:
            response = requests.head(url, timeout=timeout)
        except requests.RequestException as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return ProbeResult(url=url, available=False)

        latency = time.perf_counter() - start
        return ProbeResult(url=url, available=response.ok, latency=latency)

    def translate(self, url: str, text: str, source: str, target: str, timeout: float) -> TranslationResult:
        payload = {
            "q": text,
            "source": source,
            "target": target,
            "format": "text",
        }

        try:
            response = requests.post(url, json=payload, timeout=timeout)
        except requests.RequestException as e:
            raise EndpointError(url, f"request failed: {e}") from e

        if not response.ok:
            raise EndpointError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise EndpointError(url, "response is not JSON") from e

        if not isinstance(data, dict):
            raise EndpointError(url, "unexpected response shape")
        if "error" in data:
            raise EndpointError(url, f"translation error: {data['error']}")
        if not isinstance(data.get("translatedText"), str):
            raise EndpointError(url, "response has no translatedText")

        # Some instances send a bare code or null instead of an object
        detected = data.get("detectedLanguage")
        if not isinstance(detected, dict):
            detected = {}
        return TranslationResult(
            translated_text=data["translatedText"],
            detected_language=detected.get("language"),
            confidence=detected.get("confidence")
        )
