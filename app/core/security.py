# app/core/security.py
from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.exceptions import AuthRequired
from app.user.models import User


@dataclass(frozen=True)
class AuthContext:
    """The signed-in user for one request."""

    user_id: int
    organization_id: int | None


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_auth_context(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> AuthContext:
    token = _bearer_token(authorization)
    if token is None:
        raise AuthRequired("Missing bearer token")

    user = db.scalars(select(User).where(User.auth_token == token)).first()
    if user is None:
        raise AuthRequired("Invalid token")
    if not user.is_confirmed:
        raise AuthRequired("You have to confirm your email address before continuing")

    return AuthContext(user_id=user.id, organization_id=user.organization_id)
