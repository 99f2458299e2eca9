from fastapi.security import HTTPBearer
import jwt
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, List, Optional
from ..config import settings
import logging

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(
    scheme_name="bearerAuth",
    bearerFormat="JWT",
    auto_error=False,
)

ROLES_CLAIM = "roles"

MOCK_SUBJECT = "test-user"
MOCK_USERNAME = "test.user@example.com"
MOCK_TOKEN_ROLES = {
    "admin-token": ["Admin"],
    "user-token": ["User"],
}

def create_access_token(subject: str, roles: Optional[List[str]] = None,
                        expires_delta: Optional[timedelta] = None,
                        extra_claims: Optional[Dict[str, Any]] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode: Dict[str, Any] = dict(extra_claims or {})
    to_encode.update({
        "sub": subject,
        ROLES_CLAIM: list(roles or []),
        "exp": expire,
        "iat": now,
        "jti": str(uuid.uuid4()),
    })
    if settings.JWT_AUDIENCE:
        to_encode["aud"] = settings.JWT_AUDIENCE
    if settings.JWT_ISSUER:
        to_encode["iss"] = settings.JWT_ISSUER

    try:
        return jwt.encode(
            to_encode,
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )
    except Exception as e:
        logger.error(f"Error creating access token: {str(e)}")
        raise

def decode_token(token: str) -> Dict[str, Any]:
    """
    Validate a bearer token and return its claims.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: For any other validation failure
    """
    if settings.mock_tokens_enabled:
        return decode_mock_token(token)

    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE or None,
            issuer=settings.JWT_ISSUER or None,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_nbf": True,
                "verify_aud": bool(settings.JWT_AUDIENCE),
                "verify_iss": bool(settings.JWT_ISSUER),
                "require": ["exp", "sub"],
            }
        )
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {str(e)}")
        raise

def decode_mock_token(token: str) -> Dict[str, Any]:
    """
    Development decoder: the token text itself selects the roles.
    Tokens without a known marker authenticate with no roles.
    """
    roles: List[str] = []
    for marker, marker_roles in MOCK_TOKEN_ROLES.items():
        if marker in token:
            roles = list(marker_roles)
            break

    return {
        "sub": MOCK_SUBJECT,
        "preferred_username": MOCK_USERNAME,
        ROLES_CLAIM: roles,
    }

def extract_roles(claims: Dict[str, Any]) -> List[str]:
    """Upper-cased string entries of the roles claim."""
    roles = claims.get(ROLES_CLAIM)
    if not isinstance(roles, list):
        return []
    return [role.upper() for role in roles if isinstance(role, str)]
