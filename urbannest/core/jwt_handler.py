"""
JWT utility functions for token generation and validation
"""
from datetime import datetime, timedelta, timezone
import jwt
from urbannest.core.config import settings
from urbannest.models.principal_model import PrincipalType, SessionContext

PRINCIPAL_TYPES = ("admin", "user")


def create_access_token(principal_id: str, principal_type: PrincipalType) -> str:
    """
    Create a JWT access token

    Args:
        principal_id: Admin or user ID
        principal_type: Which collection the principal lives in

    Returns:
        str: Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": principal_id,
        "type": principal_type,
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    }

    token = jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )
    return token


def verify_token(token: str) -> dict:
    """
    Verify and decode JWT token

    Args:
        token: JWT token to verify

    Returns:
        dict: Decoded token payload

    Raises:
        jwt.InvalidTokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
        return payload
    except jwt.ExpiredSignatureError:
        raise jwt.InvalidTokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {str(e)}")


def resolve_session(token: str) -> SessionContext:
    """
    Turn a bearer token back into the calling principal's id and type.

    Raises:
        jwt.InvalidTokenError: If the token fails verification or carries no principal type
    """
    payload = verify_token(token)
    principal_type = payload.get("type")
    if principal_type not in PRINCIPAL_TYPES:
        raise jwt.InvalidTokenError("Invalid token: missing principal type")
    return SessionContext(principal_id=str(payload["sub"]), principal_type=principal_type)
