"""
Shared API dependencies
"""
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from duellog.config import get_settings
from duellog.database import get_db
from duellog.exceptions import NotFoundError
from duellog.models import User


def get_current_user_id(db: Session = Depends(get_db)) -> str:
    """
    Identity of the recording user.

    Single-user deployments: the configured default_user_id, otherwise
    the first users row.
    """
    settings = get_settings()
    if settings.default_user_id:
        return settings.default_user_id

    user_id = db.execute(select(User.id).order_by(User.created_at).limit(1)).scalar()
    if user_id is None:
        raise NotFoundError("user")
    return user_id
