from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON
from vidscribe.core.database.base import Base


def utc_now():
    return datetime.now(timezone.utc)


class RawTranscriptionModel(Base):
    """
    One row per video. The UNIQUE constraint on video_id (together with the
    primary key) is what makes saving an atomic insert-if-absent.
    """
    __tablename__ = "raw_transcriptions"

    id = Column(String, primary_key=True)
    video_id = Column(String, nullable=False, unique=True, index=True)
    language = Column(String, nullable=False, default="en")

    # Word tokens as [{"text", "start", "end", "confidence"}]
    tokens = Column(JSON, nullable=False, default=list)
    utterances = Column(JSON, nullable=False, default=list)
    meta = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
