"""
Recipe Catalog Authentication Schemas
Pydantic models for admin authentication requests and responses
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from models.users import UserRole


class UserLogin(BaseModel):
    """Schema for admin login"""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class User(BaseModel):
    """Schema for user response"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: EmailStr
    full_name: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Schema for authentication response"""
    user: User
    tokens: TokenResponse
    message: str = "Authentication successful"
