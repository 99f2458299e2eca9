from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from typing import Optional
import logging
from ..util.auth import bearer_scheme, decode_token, extract_roles
from ..schemas.auth import Principal

logger = logging.getLogger(__name__)

ADMIN = "ADMIN"
USER = "USER"

ACCESS_DENIED_MESSAGE = "Access denied: insufficient permissions"

def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"

def _unauthorized(request: Request, reason: str, has_header: bool) -> HTTPException:
    logger.warning(
        f"401 Unauthorized: method={request.method} path={request.url.path} "
        f"remote={_client(request)} hasAuthorizationHeader={has_header} reason={reason}"
    )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=reason,
        headers={"WWW-Authenticate": "Bearer"},
    )

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    Resolve the caller from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    has_header = request.headers.get("Authorization") is not None

    if credentials is None or not credentials.credentials:
        raise _unauthorized(request, "Authentication is required", has_header)

    try:
        claims = decode_token(credentials.credentials)
    except ExpiredSignatureError:
        raise _unauthorized(request, "Token has expired", has_header)
    except InvalidTokenError:
        raise _unauthorized(request, "Invalid token", has_header)

    return Principal(
        subject=str(claims.get("sub")),
        username=claims.get("preferred_username"),
        roles=extract_roles(claims),
    )

def require_roles(*required_roles: str):
    """
    Dependency to check if the caller has any of the required roles.

    Args:
        required_roles: Accepted role names

    Returns:
        Dependency function
    """
    async def check_roles(request: Request, current_user: Principal = Depends(get_current_user)) -> Principal:
        if current_user.has_any_role(*required_roles):
            return current_user

        logger.warning(
            f"403 Forbidden: method={request.method} path={request.url.path} "
            f"remote={_client(request)} user={current_user.username or current_user.subject} "
            f"roles={current_user.roles} required={list(required_roles)}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=ACCESS_DENIED_MESSAGE
        )

    return check_roles

# Specific role-based dependencies
is_user_or_admin = require_roles(ADMIN, USER)
is_admin = require_roles(ADMIN)
