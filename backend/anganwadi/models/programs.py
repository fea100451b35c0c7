"""Database model for program records."""

import uuid
from datetime import datetime, timezone

from anganwadi.db.session import Base
from sqlalchemy import Column, DateTime, String, Text


def new_program_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Program(Base):
    """Database model for a program (an event or activity on the notice board).

    Attributes:
        id: Store-assigned identifier (uuid4 hex).
        title: Program title.
        description: Free-text description.
        date: Calendar date as submitted by the admin form (not validated).
        time: Time of day as submitted by the admin form.
        image: Public image URL, empty string when no image was uploaded.
        created_at: Insert timestamp; never updated.
    """

    __tablename__ = "programs"

    id = Column(String(32), primary_key=True, default=new_program_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(String, nullable=False)
    time = Column(String, nullable=False)
    image = Column(String, nullable=False, default="")
    # NOTE: set client side so ordering keeps sub-second precision
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
