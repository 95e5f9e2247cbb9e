from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bakery.core.responses import envelope
from bakery.dependencies import get_db, require_auth
from bakery.schemas.common import Envelope, ErrorEnvelope
from bakery.schemas.event import EventCreate, EventRead, EventUpdate
from bakery.services import event_service

router = APIRouter(
    prefix="/api/events",
    tags=["Events"],
    dependencies=[Depends(require_auth)],
    responses={
        400: {"model": ErrorEnvelope},
        401: {"model": ErrorEnvelope},
        404: {"model": ErrorEnvelope},
    },
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[EventRead])
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    event = event_service.create_event(db, payload)
    return envelope(EventRead.model_validate(event), "Event created")


@router.put("", response_model=Envelope[EventRead])
def update_event(payload: EventUpdate, db: Session = Depends(get_db)):
    event = event_service.update_event(db, payload)
    return envelope(EventRead.model_validate(event), "Event updated")


@router.get("", response_model=Envelope[list[EventRead]])
def list_events(db: Session = Depends(get_db)):
    return envelope([EventRead.model_validate(event) for event in event_service.list_events(db)])


@router.get("/{event_id}", response_model=Envelope[EventRead])
def get_event(event_id: str, db: Session = Depends(get_db)):
    return envelope(EventRead.model_validate(event_service.get_event(db, event_id)))


@router.delete("/{event_id}", response_model=Envelope[dict])
def delete_event(event_id: str, db: Session = Depends(get_db)):
    deleted_id = event_service.delete_event(db, event_id)
    return envelope({"id": deleted_id}, "Event deleted")


__all__ = ["router"]
