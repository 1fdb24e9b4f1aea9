"""
Job posting reads and writes.

Listing is driven by a JobWindow evaluated against "now" at query time;
results are always newest first.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hirelink.core.config import settings
from hirelink.core.database import StoreError
from hirelink.models.job import Job

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Match the column sizes in models/job.py.
TITLE_MAX_LENGTH = 255
LINK_MAX_LENGTH = 2048


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobValidationError(ValueError):
    """Client-supplied job fields failed a precondition. Reported as a 400."""


@dataclass(frozen=True)
class JobWindow:
    """Recency filter: ``max_age=None`` means no filter."""

    max_age: Optional[timedelta] = None

    @classmethod
    def all(cls) -> JobWindow:
        return cls(max_age=None)

    @classmethod
    def since(cls, duration: timedelta) -> JobWindow:
        if duration < timedelta(0):
            raise ValueError("window duration must not be negative")
        return cls(max_age=duration)

    @property
    def is_unbounded(self) -> bool:
        return self.max_age is None

    def cutoff(self, now: datetime) -> Optional[datetime]:
        if self.max_age is None:
            return None
        return now - self.max_age


def all_jobs_window() -> JobWindow:
    if settings.ALL_JOBS_UNFILTERED:
        return JobWindow.all()
    return JobWindow.since(timedelta(days=settings.ALL_JOBS_MAX_AGE_DAYS))


def latest_jobs_window() -> JobWindow:
    return JobWindow.since(timedelta(hours=settings.LATEST_JOBS_HOURS))


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class JobQuery:
    def __init__(self, db: Session, *, clock: Clock = utcnow) -> None:
        self.db = db
        self.clock = clock

    def list_jobs(self, window: JobWindow) -> list[Job]:
        cutoff = window.cutoff(self.clock())

        try:
            qry = self.db.query(Job)
            if cutoff is not None:
                # Inclusive lower bound.
                qry = qry.filter(Job.posted_at >= cutoff)
            return qry.order_by(desc(Job.posted_at), desc(Job.id)).all()
        except SQLAlchemyError as exc:
            logger.exception("Job listing failed (window=%s)", window.max_age)
            raise StoreError("Error fetching jobs") from exc

    def create_job(
        self,
        title: Optional[str],
        description: Optional[str],
        link: Optional[str],
        *,
        posted_by: Optional[str] = None,
    ) -> Job:
        fields = {
            "title": _clean(title),
            "description": _clean(description),
            "link": _clean(link),
        }
        if not all(fields.values()):
            raise JobValidationError("Missing required fields")
        if len(fields["title"]) > TITLE_MAX_LENGTH:
            raise JobValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        if len(fields["link"]) > LINK_MAX_LENGTH:
            raise JobValidationError(f"Link must be at most {LINK_MAX_LENGTH} characters")

        job = Job(**fields, posted_at=self.clock())
        try:
            self.db.add(job)
            self.db.commit()
            self.db.refresh(job)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Job insert failed")
            raise StoreError("Error adding job") from exc

        logger.info("Created job id=%s posted_by=%s", job.id, posted_by)
        return job
