"""Bearer-token identity resolution.

Tokens are issued by the auth service. This module only turns a verified token
into the ``(user_id, user_type)`` pair the review handlers trust.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from candidate_review.config import settings
from candidate_review.core.errors import Forbidden

# HTTPBearer for simple token authentication in Swagger (just paste the access token)
security = HTTPBearer()


class UserType(str, Enum):
    """Caller types."""

    BUSINESS = "business"
    JOBSEEKER = "jobseeker"
    ADMIN = "admin"


@dataclass(frozen=True)
class AuthUser:
    """Resolved caller identity."""

    user_id: UUID
    user_type: UserType

    @property
    def is_business(self) -> bool:
        return self.user_type == UserType.BUSINESS


def create_access_token(user_id: UUID, user_type: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token (used by tooling and tests)."""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": str(user_id), "user_type": user_type, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> AuthUser:
    """Decode and verify a token, raising 401 on any problem."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = UUID(payload.get("sub", ""))
        user_type = UserType(payload.get("user_type"))
    except (JWTError, ValueError):
        raise credentials_exception

    return AuthUser(user_id=user_id, user_type=user_type)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthUser:
    """Get the caller identity from the bearer token."""
    return decode_access_token(credentials.credentials)


async def require_business_user(
    current_user: AuthUser = Depends(get_current_user),
) -> AuthUser:
    """Require a business caller."""
    if not current_user.is_business:
        raise Forbidden("Business account required")
    return current_user
