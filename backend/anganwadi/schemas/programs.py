"""Schemas for program requests and responses.

Field names follow the JSON the frontend already consumes (``createdAt``,
``totalPrograms``) rather than Python naming.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops the offset on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ProgramBase(BaseModel):
    """Base representation of a program."""

    title: str
    description: str
    date: str
    time: str


class ProgramResponse(ProgramBase):
    """Response returned for a stored program."""

    id: str
    image: str = ""
    createdAt: datetime

    @classmethod
    def from_record(cls, program) -> "ProgramResponse":
        return cls(
            id=program.id,
            title=program.title,
            description=program.description,
            date=program.date,
            time=program.time,
            image=program.image or "",
            createdAt=as_utc(program.created_at),
        )


class MessageResponse(BaseModel):
    """Success envelope for mutating program routes."""

    message: str


class DashboardStats(BaseModel):
    """Figures shown on the admin dashboard."""

    totalPrograms: int = Field(..., description="Number of stored programs.")
    thisMonthCount: int = Field(
        ..., description="Programs whose date falls in the current month."
    )
    lastAdded: str = Field(
        ..., description="Date of the newest program, or 'N/A' when empty."
    )
