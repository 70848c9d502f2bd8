"""
API Dependencies
Common dependencies for API endpoints (database session, caller identity)
"""

from typing import AsyncGenerator, Optional

from fastapi import Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_review.config import settings
from candidate_review.core.security import get_current_user, require_business_user  # noqa: F401
from candidate_review.db.session import get_db as get_db_session


# Re-export get_db for convenience
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_db_session():
        yield session


async def verify_internal_secret(
    x_internal_secret: Optional[str] = Header(None),
) -> None:
    """
    Guard for service-to-service endpoints.

    When INTERNAL_API_SECRET is empty the check is disabled (local development).
    """
    configured = settings.INTERNAL_API_SECRET
    if configured and x_internal_secret != configured:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
