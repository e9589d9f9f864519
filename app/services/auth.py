"""Admin gate.

Callers identify themselves with a ``userId`` (the Google account subject the
client signed in with), sent as a query parameter or, for writes, in the
JSON body. Admin routes resolve it against ``users.is_admin`` before doing
anything else.
"""
import json
import logging
from typing import Optional

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import ForbiddenException
from app.models.user import User

logger = logging.getLogger("app.auth")

PUBLIC_USER_ID = "public"


async def resolve_user_id(request: Request, userId: Optional[str] = Query(None)) -> Optional[str]:
    """``userId`` from the query string, falling back to the JSON body."""
    if userId:
        return userId
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
            return None
        if isinstance(body, dict) and body.get("userId"):
            return str(body["userId"])
    return None


def get_admin_user(db: Session, user_id: Optional[str]) -> Optional[User]:
    if not user_id or user_id == PUBLIC_USER_ID:
        return None
    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_admin:
        return None
    return user


def is_admin(db: Session, user_id: Optional[str]) -> bool:
    return get_admin_user(db, user_id) is not None


def require_admin(
    user_id: Optional[str] = Depends(resolve_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = get_admin_user(db, user_id)
    if user is None:
        logger.warning(f"Admin access denied for userId={user_id!r}")
        raise ForbiddenException("Unauthorized")
    return user


def admin_or_public(
    user_id: Optional[str] = Depends(resolve_user_id),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Admin user, or None for ``userId=public`` readers (published content only)."""
    if user_id == PUBLIC_USER_ID:
        return None
    return require_admin(user_id=user_id, db=db)
