from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class JobCreate(BaseModel):
    # Presence is checked by the service so missing fields map to a 400, not a 422.
    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None


class JobOut(BaseModel):
    id: int
    title: str
    description: str
    link: str
    posted_at: datetime = Field(serialization_alias="postedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_serializer("posted_at")
    def serialize_dt(self, dt: datetime):
        # SQLite hands back naive datetimes; everything is stored in UTC.
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)


class JobCreatedOut(BaseModel):
    message: str
    job: JobOut
