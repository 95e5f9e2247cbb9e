from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from bakery.core.validation import Identifier, PartialUpdate, RequiredText, UtcDatetime

EventStatus = Literal["active", "cancelled", "completed"]

END_BEFORE_START_MESSAGE = "end_date must not be earlier than start_date"


def check_end_after_start(value: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
    # start_date is absent from info.data when it is missing or failed its own checks.
    start_date = info.data.get("start_date")
    if value is not None and start_date is not None and value < start_date:
        raise ValueError(END_BEFORE_START_MESSAGE)
    return value


class EventCreate(BaseModel):
    title: RequiredText
    description: RequiredText
    start_date: UtcDatetime
    end_date: UtcDatetime
    location: RequiredText
    status: EventStatus = "active"
    image: Optional[str] = None

    check_date_order = field_validator("end_date")(check_end_after_start)


class EventUpdate(PartialUpdate):
    id: Identifier
    title: Optional[RequiredText] = None
    description: Optional[RequiredText] = None
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    location: Optional[RequiredText] = None
    status: Optional[EventStatus] = None
    image: Optional[str] = None

    check_date_order = field_validator("end_date")(check_end_after_start)


class EventRead(BaseModel):
    id: str
    title: str
    description: str
    start_date: UtcDatetime
    end_date: UtcDatetime
    location: str
    status: str
    image: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
