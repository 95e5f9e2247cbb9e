from sqlalchemy import Boolean, Column, String

from bakery.core.validation import new_identifier
from bakery.database.base import Base, TimestampMixin

USER_ROLES = ("admin", "user")


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_identifier)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")
    confirmed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return "<User {} {}>".format(self.id, self.email)


__all__ = ["USER_ROLES", "User"]
