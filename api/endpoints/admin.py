"""
Recipe Catalog Admin Endpoints
Admin login and account details
"""

from fastapi import APIRouter, Depends
from typing import Annotated

from core.dependencies import AdminUser, DBSession, get_auth_service
from schemas.auth_schemas import AuthResponse, User, UserLogin
from services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: UserLogin,
    db: DBSession,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Authenticate an admin and return an access token

    The token is sent back as ``Authorization: Bearer <token>`` on protected routes.
    """
    user, tokens = await auth_service.authenticate_user(login_data, db)

    return AuthResponse(
        user=User.model_validate(user),
        tokens=tokens,
        message="Login successful!"
    )


@router.get("/details", response_model=User)
async def admin_details(current_admin: AdminUser):
    """Details of the authenticated admin"""
    return current_admin
