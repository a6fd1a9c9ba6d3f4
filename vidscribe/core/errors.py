# File: vidscribe/core/errors.py

from typing import Optional, Sequence


class VidscribeError(Exception):
    """Base class for every error surfaced by the pipeline core."""


class InitializationError(VidscribeError):
    """The transcoding engine could not be loaded."""


class ExtractionError(VidscribeError):
    """A transcode job failed."""

    def __init__(self, message: str, stderr: Optional[str] = None):
        super().__init__(message)
        self.stderr = stderr


class DuplicateRecordError(VidscribeError):
    """
    Write-once violation.
    Raised when a raw transcription with the same id OR the same video id
    is already stored. Callers decide whether to reuse the existing record.
    """

    def __init__(self, record_id: str, video_id: str):
        super().__init__(
            f"Raw transcription already exists and cannot be modified "
            f"(id={record_id}, video_id={video_id})"
        )
        self.record_id = record_id
        self.video_id = video_id


class AllEndpointsUnavailableError(VidscribeError):
    """Translation exhausted every endpoint across every retry."""

    def __init__(self, endpoints: Sequence[str], attempts: int):
        super().__init__(
            f"All translation endpoints failed after {attempts} attempt(s): {', '.join(endpoints)}"
        )
        self.endpoints = list(endpoints)
        self.attempts = attempts
