import logging
from dataclasses import replace
from typing import Callable, List, Optional
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from vidscribe.core.database.connection import SessionLocal
from vidscribe.core.errors import DuplicateRecordError
from .sql_models import RawTranscriptionModel, utc_now
from ..domain.interfaces import IRawTranscriptionRepository
from ..domain.models import RawTranscriptionRecord, WordToken

logger = logging.getLogger(__name__)


class SqlRawTranscriptionRepo(IRawTranscriptionRepository):
    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory

    def insert_if_absent(self, record: RawTranscriptionRecord) -> RawTranscriptionRecord:
        """
        Single INSERT, no existence check beforehand.
        Two concurrent saves for the same video both reach the database and
        the unique index lets exactly one of them commit.
        """
        created_at = record.created_at or utc_now()

        with self._session_factory() as db:
            db.add(RawTranscriptionModel(
                id=record.id,
                video_id=record.video_id,
                language=record.language,
                tokens=[t.to_dict() for t in record.tokens],
                utterances=list(record.utterances),
                meta=dict(record.metadata),
                created_at=created_at
            ))
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                logger.warning(f"Rejected duplicate raw transcription (id={record.id}, video_id={record.video_id})")
                raise DuplicateRecordError(record.id, record.video_id) from e

        return replace(record, created_at=created_at)

    def get_by_video_id(self, video_id: str) -> Optional[RawTranscriptionRecord]:
        with self._session_factory() as db:
            row = db.execute(
                select(RawTranscriptionModel).where(RawTranscriptionModel.video_id == video_id)
            ).scalar_one_or_none()
            return self._to_domain(row) if row else None

    def get_by_id(self, record_id: str) -> Optional[RawTranscriptionRecord]:
        with self._session_factory() as db:
            row = db.get(RawTranscriptionModel, record_id)
            return self._to_domain(row) if row else None

    def exists_for_video(self, video_id: str) -> bool:
        with self._session_factory() as db:
            found = db.execute(
                select(RawTranscriptionModel.id).where(RawTranscriptionModel.video_id == video_id)
            ).first()
            return found is not None

    def list_all(self) -> List[RawTranscriptionRecord]:
        with self._session_factory() as db:
            rows = db.execute(
                select(RawTranscriptionModel).order_by(RawTranscriptionModel.created_at)
            ).scalars().all()
            return [self._to_domain(row) for row in rows]

    def delete_by_video_id(self, video_id: str) -> bool:
        with self._session_factory() as db:
            try:
                result = db.execute(
                    delete(RawTranscriptionModel).where(RawTranscriptionModel.video_id == video_id)
                )
                db.commit()
            except Exception:
                db.rollback()
                raise
            return result.rowcount > 0

    def delete_all(self) -> int:
        with self._session_factory() as db:
            try:
                result = db.execute(delete(RawTranscriptionModel))
                db.commit()
            except Exception:
                db.rollback()
                raise
            return result.rowcount

    @staticmethod
    def _to_domain(row: RawTranscriptionModel) -> RawTranscriptionRecord:
        return RawTranscriptionRecord(
            id=row.id,
            video_id=row.video_id,
            language=row.language,
            tokens=tuple(WordToken.from_dict(t) for t in row.tokens or []),
            utterances=tuple(row.utterances or []),
            metadata=dict(row.meta or {}),
            created_at=row.created_at
        )
