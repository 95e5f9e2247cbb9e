"""Request validation helpers shared by every entity.

Each entity declares its rules as pydantic models under ``bakery.schemas``;
pydantic evaluates all of them and reports every violation at once. The
helpers here turn those reports into the ``{"field", "message"}`` items of
the error envelope and cover the rules pydantic has no built-in for
(identifier format, partial updates that try to null a required field).
"""
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Iterable, Optional

from pydantic import AfterValidator, BaseModel, StringConstraints, model_validator

from bakery.core.errors import ErrorKind, ServiceError

_LOCATION_ROOTS = {"body", "query", "path", "header"}
_VALUE_ERROR_PREFIX = "Value error, "

# Upper bound of a signed 32-bit INTEGER column.
MAX_QUANTITY = 2**31 - 1


def is_identifier(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def new_identifier() -> str:
    return str(uuid.uuid4())


def ensure_identifier(value: Any, field: str = "id") -> str:
    if not is_identifier(value):
        raise ServiceError(
            ErrorKind.INVALID_IDENTIFIER,
            "Invalid identifier",
            [{"field": field, "message": "must be a valid identifier"}],
        )
    return str(uuid.UUID(value))


def _check_identifier(value: str) -> str:
    if not is_identifier(value):
        raise ValueError("must be a valid identifier")
    return str(uuid.UUID(value))


Identifier = Annotated[str, AfterValidator(_check_identifier)]
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


def _field_name(location: Iterable[Any]) -> Optional[str]:
    parts = [str(part) for part in location]
    if parts and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts) or None


def collect_violations(errors: Iterable[dict]) -> list[dict]:
    violations = []
    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        violations.append({"field": _field_name(error.get("loc", ())), "message": message})
    return violations


class AcceptsLegacyNames(BaseModel):
    """Renames legacy (Spanish) payload keys to their canonical field names.

    Violations are then reported under the canonical name whichever spelling
    the client used. A canonical key wins when both are present.
    """

    legacy_names: ClassVar[dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def rename_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not cls.legacy_names:
            return data
        renamed = dict(data)
        for legacy, canonical in cls.legacy_names.items():
            if legacy in renamed:
                value = renamed.pop(legacy)
                renamed.setdefault(canonical, value)
        return renamed


class PartialUpdate(BaseModel):
    """Base for update payloads where every field is optional but none may be null."""

    @model_validator(mode="after")
    def reject_nulls(self):
        nulled = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulled:
            raise ValueError("fields may not be null: {}".format(", ".join(nulled)))
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


__all__ = [
    "AcceptsLegacyNames",
    "MAX_QUANTITY",
    "Identifier",
    "PartialUpdate",
    "RequiredText",
    "UtcDatetime",
    "as_utc",
    "collect_violations",
    "ensure_identifier",
    "is_identifier",
    "new_identifier",
]
