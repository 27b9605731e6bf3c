"""
Recipe Catalog Core Dependencies
FastAPI dependencies for authentication, authorization, and common functionality
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Annotated
import structlog

from core.database import get_db
from core.exceptions import AuthenticationError, ValidationError
from models.users import User
from services.auth_service import AuthService

logger = structlog.get_logger()

# Security scheme
security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if not credentials:
        raise AuthenticationError("Not authenticated")

    try:
        user = await auth_service.get_current_user(credentials.credentials, db)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=e.message, path=request.url.path)
        raise

    request.state.user_id = user.id
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Dependency for admin-only endpoints"""
    return auth_service.authorize_admin(current_user)


MAX_PAGE_SIZE = 100


async def get_pagination_params(
    page: int = 1,
    limit: int = 20,
) -> dict:
    """
    Get pagination parameters with validation

    Args:
        page: Page number (1-based)
        limit: Items per page, at most MAX_PAGE_SIZE

    Returns:
        Dictionary with offset, limit, page
    """
    if page < 1:
        raise ValidationError("Page must be greater than 0")

    if limit < 1:
        raise ValidationError("Limit must be greater than 0")

    if limit > MAX_PAGE_SIZE:
        raise ValidationError(f"Limit cannot exceed {MAX_PAGE_SIZE}")

    offset = (page - 1) * limit

    return {
        "offset": offset,
        "limit": limit,
        "page": page
    }


# Type aliases for common dependencies
AdminUser = Annotated[User, Depends(require_admin)]
DBSession = Annotated[AsyncSession, Depends(get_db)]
PaginationParams = Annotated[dict, Depends(get_pagination_params)]
