from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

SUPPORTED_FORMATS = ("wav", "mp3", "flac")


@dataclass(frozen=True)
class ExtractionOptions:
    """
    Encoding parameters for extraction/conversion.
    Defaults target speech recognition uploads: 16kHz mono WAV.
    `quality` maps to -q:a for mp3 and -compression_level for flac.
    """
    format: str = "wav"
    sample_rate: int = 16000
    channels: int = 1
    quality: int = 5

    def __post_init__(self):
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported audio format: {self.format}")
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive: {self.sample_rate}")
        if self.channels <= 0:
            raise ValueError(f"Channel count must be positive: {self.channels}")


@dataclass(frozen=True)
class MediaAsset:
    """
    User-supplied video/audio bytes. Owned by the caller, never persisted.
    """
    id: str
    data: bytes
    container_format: str = "mp4"
    duration: float = 0.0

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Path, asset_id: str = None) -> "MediaAsset":
        if not path.exists():
            raise FileNotFoundError(f"Media file not found: {path}")
        return cls(
            id=asset_id or path.stem,
            data=path.read_bytes(),
            container_format=path.suffix.lstrip(".").lower() or "bin"
        )


@dataclass(frozen=True)
class AudioArtifact:
    """
    The result of a successful extraction or conversion.
    """
    data: bytes
    format: str
    sample_rate: int
    channels: int
    duration: float = 0.0

    @property
    def mime_type(self) -> str:
        return f"audio/{self.format}"

    def to_dict(self) -> Dict[str, Any]:
        """Shape consumed by the recognizer-upload collaborator."""
        return {
            "bytes": self.data,
            "format": self.format,
            "sampleRate": self.sample_rate,
            "channels": self.channels,
            "duration": self.duration,
        }
