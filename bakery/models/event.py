from sqlalchemy import CheckConstraint, Column, DateTime, String

from bakery.core.validation import new_identifier
from bakery.database.base import Base, TimestampMixin

EVENT_STATUSES = ("active", "cancelled", "completed")
DEFAULT_EVENT_IMAGE = "default-event.jpg"


class Event(TimestampMixin, Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_identifier)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    location = Column(String, nullable=False)

    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)

    status = Column(String, nullable=False, default="active")
    image = Column(String, nullable=False, default=DEFAULT_EVENT_IMAGE)

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_events_date_order"),
    )


__all__ = ["DEFAULT_EVENT_IMAGE", "EVENT_STATUSES", "Event"]
