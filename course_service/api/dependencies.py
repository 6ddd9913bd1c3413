from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from course_service.db.engine import async_session_factory, session_scope
from course_service.models.principal import Principal
from course_service.repos.store import ContentStore, in_memory_store, pg_store
from course_service.services import token_service
from course_service.services.errors import ForbiddenError

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/oauth/token")

# --- Content store ---
# In-memory when no DATABASE_URL is configured; otherwise one Postgres
# session (and transaction) per request.

memory_store = in_memory_store()


async def get_store() -> AsyncGenerator[ContentStore, None]:
    if async_session_factory is None:
        yield memory_store
        return
    async with session_scope() as session:
        yield pg_store(session)


Store = Annotated[ContentStore, Depends(get_store)]


# --- Identity ---


def require_user(
    raw_token: Annotated[str, Depends(oauth2_scheme)],
) -> Principal:
    """Extract and validate the JWT bearer token. Returns a Principal.

    Used as a FastAPI dependency on any protected endpoint.
    """
    try:
        claims = token_service.decode_access_token(raw_token)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal = Principal(
        user_id=claims["sub"],
        roles=frozenset(claims.get("roles", [])),
    )
    logger.debug(
        "Token validated for user=%s roles=%s",
        principal.user_id,
        principal.roles,
    )
    return principal


def require_role(role: str):
    """Dependency factory: demand a specific role.

    Usage: Depends(require_role("teacher"))
    Returns the Principal if the role is present, else 403.
    """

    def _guard(
        principal: Annotated[Principal, Depends(require_user)],
    ) -> Principal:
        if not principal.has_role(role):
            logger.warning(
                "Access denied: user=%s missing role=%s",
                principal.user_id,
                role,
            )
            raise ForbiddenError(f"Access denied. {role.capitalize()}s only.")
        return principal

    return _guard


CurrentUser = Annotated[Principal, Depends(require_user)]
Teacher = Annotated[Principal, Depends(require_role("teacher"))]
