"""
Authentication Dependency for FastAPI.

Validates the bearer access token issued by the identity provider and returns
the caller's identity. The `sub` claim is the user id.

Config needed (from productboards.config.settings):
- AUTH_JWT_SECRET
- AUTH_JWT_AUDIENCE
- AUTH_JWT_ISSUER (optional)
"""

from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from productboards.config.settings import Config
from productboards.domain.value_objects.user_id import UserId


@dataclass
class AuthUser:
    id: UserId
    email: Optional[str] = None


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and validate user from JWT token.

    Raises:
        HTTPException 401 if the token is missing, invalid, expired, or has no
        usable `sub` claim
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Unauthorized")

    options = {"require": ["exp", "sub"]}
    try:
        claims = jwt.decode(
            credentials.credentials,
            Config.AUTH_JWT_SECRET,
            algorithms=["HS256"],
            audience=Config.AUTH_JWT_AUDIENCE,
            issuer=Config.AUTH_JWT_ISSUER,
            options=options,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        raise _unauthorized(f"Invalid token: {str(e)}")

    try:
        user_id = UserId(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Missing required claims in token")

    return AuthUser(id=user_id, email=claims.get("email"))
