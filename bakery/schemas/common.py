from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    message: Optional[str] = None
    data: DataT


class ErrorItem(BaseModel):
    field: Optional[str] = None
    message: str


class ErrorEnvelope(BaseModel):
    message: str
    errors: Optional[list[ErrorItem]] = None
