# File: vidscribe/features/transcription_cache/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class WordToken:
    """
    Atomic unit of recognizer output. Times are in milliseconds.
    """
    text: str
    start_ms: float
    end_ms: float
    confidence: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordToken":
        return cls(
            text=str(data["text"]),
            start_ms=float(data["start"]),
            end_ms=float(data["end"]),
            confidence=float(data.get("confidence", 0.0))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "start": self.start_ms, "end": self.end_ms, "confidence": self.confidence}


@dataclass(frozen=True)
class RawTranscriptionRecord:
    """
    The raw recognizer output for one video.
    Write-once: there is no update path, only create and read.
    """
    id: str
    video_id: str
    language: str
    tokens: Tuple[WordToken, ...] = field(default_factory=tuple)

    # Opaque pass-through (speaker turns etc.)
    utterances: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    # Header Metadata (averageConfidence, totalWords, ...)
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id or not self.video_id:
            raise ValueError("Raw transcription requires both id and video_id.")

    @property
    def average_confidence(self) -> float:
        return float(self.metadata.get("averageConfidence", 0.0))

    @classmethod
    def from_recognizer_output(cls, payload: Dict[str, Any]) -> "RawTranscriptionRecord":
        """
        Builds a record from the recognizer output contract:
        {id, videoId, language, assemblyData: {words, utterances}, metadata, createdAt}
        Missing metadata counters are derived from the words.
        """
        assembly = payload.get("assemblyData") or {}
        tokens = tuple(WordToken.from_dict(w) for w in (assembly.get("words") or []))
        utterances = tuple(assembly.get("utterances") or [])

        metadata = dict(payload.get("metadata") or {})
        if "averageConfidence" not in metadata:
            metadata["averageConfidence"] = (
                sum(t.confidence for t in tokens) / len(tokens) if tokens else 0.0
            )
        metadata.setdefault("totalWords", len(tokens))
        metadata.setdefault("totalUtterances", len(utterances))

        created_at = payload.get("createdAt")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))

        return cls(
            id=str(payload["id"]),
            video_id=str(payload["videoId"]),
            language=payload.get("language") or "en",
            tokens=tokens,
            utterances=utterances,
            metadata=metadata,
            created_at=created_at
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "videoId": self.video_id,
            "language": self.language,
            "assemblyData": {
                "words": [t.to_dict() for t in self.tokens],
                "utterances": list(self.utterances),
            },
            "metadata": dict(self.metadata),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class StorageStats:
    total_records: int
    total_size: int
    average_confidence: float
