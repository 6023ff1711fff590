"""Shared API dependencies for caller identity and database access."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from roadmap_pulse.core.errors import NotFoundError
from roadmap_pulse.db.session import get_db
from roadmap_pulse.models import User
from roadmap_pulse.repositories.user_repo import UserRepository

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    db: SessionDep,
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the caller from the ``X-User-Id`` header.

    Authentication happens upstream; this only trusts and resolves the id
    the gateway forwards.

    Raises:
        HTTPException: 401 if the header is missing.
        NotFoundError: If the id does not match a user.
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    user = UserRepository(db).get_by_id(x_user_id)
    if user is None:
        raise NotFoundError("User", x_user_id)
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
