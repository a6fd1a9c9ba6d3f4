from abc import ABC, abstractmethod
from typing import List, Optional
from .models import RawTranscriptionRecord


class IRawTranscriptionRepository(ABC):
    """
    Contract for write-once persistence of raw recognizer output.
    There is deliberately no update method.
    """

    @abstractmethod
    def insert_if_absent(self, record: RawTranscriptionRecord) -> RawTranscriptionRecord:
        """
        Inserts the record in a single atomic statement.
        The store's uniqueness constraints on id and video_id decide the outcome.

        Returns:
            The stored record (with created_at populated).

        Raises:
            DuplicateRecordError: If the id or the video_id is already stored.
        """
        pass

    @abstractmethod
    def get_by_video_id(self, video_id: str) -> Optional[RawTranscriptionRecord]:
        pass

    @abstractmethod
    def get_by_id(self, record_id: str) -> Optional[RawTranscriptionRecord]:
        pass

    @abstractmethod
    def exists_for_video(self, video_id: str) -> bool:
        pass

    @abstractmethod
    def list_all(self) -> List[RawTranscriptionRecord]:
        pass

    @abstractmethod
    def delete_by_video_id(self, video_id: str) -> bool:
        """Maintenance only. Returns True if a record was removed."""
        pass

    @abstractmethod
    def delete_all(self) -> int:
        """Maintenance only. Returns the number of removed records."""
        pass
