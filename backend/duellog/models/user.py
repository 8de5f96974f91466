"""
User Model

Single local user in the current deployment.
"""
from sqlalchemy import Column, String, DateTime

from duellog.database import Base
from duellog.models.types import utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<User(name={self.name})>"
