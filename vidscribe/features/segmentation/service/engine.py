import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from vidscribe.features.transcription_cache.domain.models import RawTranscriptionRecord, WordToken
from ..domain.models import GenerationStats, SegmentationConfig, SubtitleCue

logger = logging.getLogger(__name__)


@dataclass
class _OpenSegment:
    text: str
    start_ms: float
    end_ms: float
    confidence: float


class SegmentationEngine:
    """
    Turns raw word tokens into subtitle cues.
    Boundaries come only from sentence-final punctuation and the end of the
    token stream. Pure: the same (record, config) always yields the same cues,
    so cues can be regenerated without re-running recognition.
    """

    def __init__(self, config: Optional[SegmentationConfig] = None):
        self.config = config or SegmentationConfig()

    def generate_from_raw_data(
        self,
        record: RawTranscriptionRecord,
        config: Optional[SegmentationConfig] = None
    ) -> List[SubtitleCue]:
        config = config or self.config

        if not record.tokens:
            logger.warning(f"No words available for subtitle generation (video {record.video_id})")
            return []

        # 1. Drop low-confidence tokens
        tokens = [t for t in record.tokens if t.confidence >= config.min_confidence]
        if not tokens:
            logger.warning(f"No words meet confidence threshold {config.min_confidence} (video {record.video_id})")
            return []

        # 2. Split on punctuation
        segments = self._segment_by_punctuation(tokens, config.sentence_end_punctuation)

        # 3. Convert to cues (ms -> s)
        return [
            SubtitleCue(
                id=f"{record.video_id}_segment_{index}",
                video_id=record.video_id,
                text=seg.text.strip(),
                start_sec=seg.start_ms / 1000,
                end_sec=seg.end_ms / 1000,
                confidence=seg.confidence,
                language=record.language
            )
            for index, seg in enumerate(segments)
        ]

    def get_generation_stats(
        self,
        record: RawTranscriptionRecord,
        config: Optional[SegmentationConfig] = None
    ) -> GenerationStats:
        """Recomputes the cues (nothing is cached) and summarizes them."""
        cues = self.generate_from_raw_data(record, config)
        if not cues:
            return GenerationStats()

        total_words = sum(len(cue.text.split()) for cue in cues)
        return GenerationStats(
            total_words=total_words,
            total_segments=len(cues),
            average_segment_length=total_words / len(cues),
            average_confidence=sum(cue.confidence for cue in cues) / len(cues),
            total_duration=max(cue.end_sec for cue in cues)
        )

    @staticmethod
    def _segment_by_punctuation(tokens: List[WordToken], marks: Sequence[str]) -> List[_OpenSegment]:
        segments: List[_OpenSegment] = []
        current: Optional[_OpenSegment] = None
        last_index = len(tokens) - 1

        for i, token in enumerate(tokens):
            if current is None:
                current = _OpenSegment(token.text, token.start_ms, token.end_ms, token.confidence)
            else:
                current.text += " " + token.text
                current.end_ms = token.end_ms
                # Pessimistic: a cue is only as reliable as its weakest word
                current.confidence = min(current.confidence, token.confidence)

            if _is_sentence_end(token.text, marks) or i == last_index:
                segments.append(current)
                current = None

        return segments


def _is_sentence_end(text: str, marks: Sequence[str]) -> bool:
    stripped = text.strip()
    return any(stripped.endswith(mark) for mark in marks)


# Default-config engine instance
default_engine = SegmentationEngine()
