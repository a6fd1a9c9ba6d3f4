import asyncio
import json
import logging
from typing import List, Optional
from ..data.repository import SqlRawTranscriptionRepo
from ..domain.interfaces import IRawTranscriptionRepository
from ..domain.models import RawTranscriptionRecord, StorageStats

logger = logging.getLogger(__name__)


class TranscriptionCache:
    """
    Facade for the Transcription Cache Feature.
    Durable, write-once store for raw recognizer output keyed by video.
    Repository calls are blocking SQLAlchemy work, so they run in worker
    threads and never stall the event loop.
    """

    def __init__(self, repo: Optional[IRawTranscriptionRepository] = None):
        self.repo = repo or SqlRawTranscriptionRepo()

    async def save_raw_data(self, record: RawTranscriptionRecord) -> RawTranscriptionRecord:
        """
        Persists a record exactly once per video.

        Raises:
            DuplicateRecordError: If the id or the video already has a record.
        """
        stored = await asyncio.to_thread(self.repo.insert_if_absent, record)
        logger.info(f"Raw transcription saved: {stored.id} (video {stored.video_id}, {len(stored.tokens)} words)")
        return stored

    async def get_raw_data(self, video_id: str) -> Optional[RawTranscriptionRecord]:
        return await asyncio.to_thread(self.repo.get_by_video_id, video_id)

    async def get_raw_data_by_id(self, record_id: str) -> Optional[RawTranscriptionRecord]:
        return await asyncio.to_thread(self.repo.get_by_id, record_id)

    async def has_raw_data(self, video_id: str) -> bool:
        return await asyncio.to_thread(self.repo.exists_for_video, video_id)

    async def get_all_raw_data(self) -> List[RawTranscriptionRecord]:
        return await asyncio.to_thread(self.repo.list_all)

    async def get_storage_stats(self) -> StorageStats:
        records = await self.get_all_raw_data()
        if not records:
            return StorageStats(total_records=0, total_size=0, average_confidence=0.0)

        # Estimate: size of the serialized records
        total_size = len(json.dumps([r.to_dict() for r in records]).encode("utf-8"))
        average_confidence = sum(r.average_confidence for r in records) / len(records)

        return StorageStats(
            total_records=len(records),
            total_size=total_size,
            average_confidence=average_confidence
        )

    async def delete_raw_data(self, video_id: str) -> bool:
        """Maintenance: removes the record of one video."""
        removed = await asyncio.to_thread(self.repo.delete_by_video_id, video_id)
        if removed:
            logger.warning(f"Raw transcription for video {video_id} deleted")
        return removed

    async def clear_all(self) -> int:
        """Maintenance/testing only. Removes every stored record."""
        count = await asyncio.to_thread(self.repo.delete_all)
        logger.warning(f"All raw transcription data cleared ({count} records)")
        return count


# Singleton Instance for easy import
transcription_cache = TranscriptionCache()
