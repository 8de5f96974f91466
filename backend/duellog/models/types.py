"""
Custom SQLAlchemy Mixins and id helpers

Provides common timestamp columns and the id formats used for rows
created at runtime.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utc_now() -> datetime:
    """Current time in UTC"""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Random UUID4 string, used for seasons, decks and matches"""
    return str(uuid.uuid4())


def new_template_id() -> str:
    """Short id for auto-created deck templates (tpl-auto-xxxxxxxx)"""
    return "tpl-auto-" + uuid.uuid4().hex[:8]


class TimestampMixin:
    """
    Mixin for common timestamp columns.

    Provides:
    - created_at: Auto-set on insert
    - updated_at: Auto-updated on update
    """
    created_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )
