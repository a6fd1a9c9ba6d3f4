import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional
from vidscribe.features.segmentation.domain.models import SegmentationConfig, SubtitleCue
from vidscribe.features.segmentation.service.engine import SegmentationEngine
from vidscribe.features.transcription_cache.domain.models import RawTranscriptionRecord
from vidscribe.features.transcription_cache.service.api import TranscriptionCache
from vidscribe.features.translation.service.gateway import TranslationGateway

logger = logging.getLogger(__name__)


class SubtitlePipeline:
    """
    Wires the cache, the segmenter and the translator together:
    recognizer output -> stored once -> cues on demand -> translated cues.
    """

    def __init__(
        self,
        cache: Optional[TranscriptionCache] = None,
        engine: Optional[SegmentationEngine] = None,
        gateway: Optional[TranslationGateway] = None
    ):
        self.cache = cache or TranscriptionCache()
        self.engine = engine or SegmentationEngine()
        self._gateway = gateway

    @property
    def gateway(self) -> TranslationGateway:
        # Built on first use so cue generation works without translation settings
        if self._gateway is None:
            self._gateway = TranslationGateway()
        return self._gateway

    async def store_transcription(self, payload: Dict[str, Any]) -> RawTranscriptionRecord:
        """
        Persists recognizer output.

        Raises:
            DuplicateRecordError: If the video already has a stored transcription.
        """
        record = RawTranscriptionRecord.from_recognizer_output(payload)
        return await self.cache.save_raw_data(record)

    async def generate_subtitles(self, video_id: str, config: Optional[SegmentationConfig] = None) -> List[SubtitleCue]:
        record = await self.cache.get_raw_data(video_id)
        if record is None:
            logger.warning(f"No raw transcription stored for video {video_id}")
            return []

        cues = self.engine.generate_from_raw_data(record, config)
        logger.info(f"Generated {len(cues)} cues for video {video_id}")
        return cues

    async def translate_cues(self, cues: List[SubtitleCue], target_lang: str) -> List[SubtitleCue]:
        """
        Returns copies of the cues with translated text.
        Cues already in target_lang are returned as-is. Translation errors
        propagate; untranslated text is never substituted.
        """
        if all(cue.language == target_lang for cue in cues):
            return list(cues)

        # One cue at a time: each miss probes the whole endpoint pool
        translated = []
        for cue in cues:
            if cue.language == target_lang:
                translated.append(cue)
                continue
            result = await self.gateway.translate(cue.text, cue.language, target_lang)
            translated.append(replace(cue, text=result.translated_text, language=target_lang))

        logger.info(f"Translated {len(cues)} cues -> {target_lang}")
        return translated
