import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from bakery.core.errors import ServiceError
from bakery.core.validation import as_utc, ensure_identifier
from bakery.models.event import DEFAULT_EVENT_IMAGE, Event
from bakery.schemas.event import END_BEFORE_START_MESSAGE, EventCreate, EventUpdate

logger = logging.getLogger(__name__)


def check_date_order(start_date: datetime, end_date: datetime) -> None:
    if as_utc(end_date) < as_utc(start_date):
        raise ServiceError.validation([{"field": "end_date", "message": END_BEFORE_START_MESSAGE}])


def _load_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, ensure_identifier(event_id))
    if event is None:
        raise ServiceError.not_found("Event not found")
    return event


def create_event(db: Session, payload: EventCreate) -> Event:
    check_date_order(payload.start_date, payload.end_date)
    event = Event(
        title=payload.title,
        description=payload.description,
        start_date=payload.start_date,
        end_date=payload.end_date,
        location=payload.location,
        status=payload.status,
        image=payload.image or DEFAULT_EVENT_IMAGE,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event %s", event.id)
    return event


def list_events(db: Session) -> list[Event]:
    stmt = select(Event).order_by(Event.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def get_event(db: Session, event_id: str) -> Event:
    return _load_event(db, event_id)


def update_event(db: Session, payload: EventUpdate) -> Event:
    event = _load_event(db, payload.id)
    changes = payload.changes()
    changes.pop("id", None)

    # An omitted date keeps its stored value, so the order check runs on the merged pair.
    check_date_order(
        changes.get("start_date", event.start_date),
        changes.get("end_date", event.end_date),
    )

    for field, value in changes.items():
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s (%s)", event.id, ", ".join(sorted(changes)) or "no changes")
    return event


def delete_event(db: Session, event_id: str) -> str:
    event = _load_event(db, event_id)
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s", event.id)
    return event.id


__all__ = [
    "check_date_order",
    "create_event",
    "delete_event",
    "get_event",
    "list_events",
    "update_event",
]
