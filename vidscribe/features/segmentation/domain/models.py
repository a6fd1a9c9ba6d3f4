# File: vidscribe/features/segmentation/domain/models.py
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class SegmentationConfig:
    """
    Controls how word tokens are grouped into cues.

    Only sentence_end_punctuation and min_confidence drive the segmentation.
    min_segment_duration, max_segment_duration and keep_disfluencies are
    accepted for callers that store them, but are not enforced.
    """
    sentence_end_punctuation: Tuple[str, ...] = (".", "!", "?")
    min_confidence: float = 0.0
    min_segment_duration: float = 0.1
    max_segment_duration: float = 60.0
    keep_disfluencies: bool = False

    def __post_init__(self):
        # Accept lists/sets from callers but keep the config hashable
        object.__setattr__(self, "sentence_end_punctuation", tuple(self.sentence_end_punctuation))
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(f"min_confidence must be within [0, 1]: {self.min_confidence}")


@dataclass(frozen=True)
class SubtitleCue:
    """
    One subtitle unit. Derived from a raw transcription, never authoritative.
    """
    id: str
    video_id: str
    text: str
    start_sec: float
    end_sec: float
    confidence: float
    language: str

    @property
    def duration(self) -> float:
        return self.end_sec - self.start_sec

    def to_dict(self) -> Dict[str, Any]:
        """Shape consumed by formatting/export collaborators."""
        return {
            "id": self.id,
            "text": self.text,
            "startSec": self.start_sec,
            "endSec": self.end_sec,
            "confidence": self.confidence,
            "language": self.language,
            "videoId": self.video_id,
        }


@dataclass(frozen=True)
class GenerationStats:
    total_words: int = 0
    total_segments: int = 0
    average_segment_length: float = 0.0
    average_confidence: float = 0.0
    total_duration: float = 0.0
