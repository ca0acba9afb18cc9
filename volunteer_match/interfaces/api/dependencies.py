"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from volunteer_match.domain.entities import User
from volunteer_match.infrastructure.database import get_db, unit_of_work
from volunteer_match.infrastructure.repositories import UserRepository
from volunteer_match.infrastructure.security import actor_id_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        user_id = actor_id_from_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    with unit_of_work(db):
        user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_volunteer(current_user: User = Depends(get_current_active_user)) -> User:
    if not current_user.is_volunteer():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only volunteers can perform this action.",
        )
    return current_user


def require_organization_member(
    current_user: User = Depends(get_current_active_user),
) -> User:
    if not current_user.is_organization_member():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only organization members can perform this action.",
        )
    return current_user
