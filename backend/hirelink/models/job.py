from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from hirelink.core.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    link = Column(String(2048), nullable=False)

    # Set once at creation; postings are never updated.
    posted_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
