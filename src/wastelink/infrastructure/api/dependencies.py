"""FastAPI dependencies for recycler authentication.

The session token is read from the session cookie, or from an
``Authorization: Bearer`` header for non-browser clients.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from wastelink.core.config import get_settings
from wastelink.core.logging import get_logger
from wastelink.domain.entities import ActingRecycler
from wastelink.infrastructure.auth import (
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from wastelink.infrastructure.persistence.database import get_db_session
from wastelink.infrastructure.persistence.repositories import RecyclerRepository

logger = get_logger(__name__)

RECYCLER_ROLE = "recycler"


@dataclass
class CurrentRecycler:
    """The authenticated recycler, loaded from the database for this request."""

    id: str
    name: str
    email: str

    def as_actor(self) -> ActingRecycler:
        """Identity handed to domain services."""
        return ActingRecycler(id=self.id, name=self.name)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_token(request: Request, authorization: str | None) -> str | None:
    """Get the session token from the cookie or the Authorization header."""
    token = request.cookies.get(get_settings().session_cookie_name)
    if token:
        return token

    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


async def get_current_recycler(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
    session: AsyncSession = Depends(get_db_session),
) -> CurrentRecycler:
    """Resolve and validate the recycler making the request.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired, or
            belongs to a recycler that no longer exists.
    """
    token = extract_token(request, authorization)
    if token is None:
        logger.info("Authentication failed: no session token")
        raise _unauthorized("Unauthorized - No token provided")

    try:
        payload = jwt_service.validate_access_token(token, role=RECYCLER_ROLE)
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise _unauthorized("Token has expired")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise _unauthorized("Unauthorized - Invalid token")

    recycler_id = payload.get("sub")
    recycler = await RecyclerRepository(session).get_by_id(recycler_id) if recycler_id else None
    if recycler is None:
        logger.warning("Authentication failed: recycler not found", recycler_id=recycler_id)
        raise _unauthorized("Unauthorized - Recycler not found")

    return CurrentRecycler(id=recycler.id, name=recycler.name, email=recycler.email)


# Type alias for dependency injection
AuthenticatedRecycler = Annotated[CurrentRecycler, Depends(get_current_recycler)]
