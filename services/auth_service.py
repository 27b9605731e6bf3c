"""
Recipe Catalog Authentication Service
JWT authentication and role checks for admin accounts
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Tuple
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import Settings
from core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from models.users import User, UserRole
from schemas.auth_schemas import UserLogin, TokenResponse
from utils.security import SecurityUtils

logger = structlog.get_logger()


class AuthService:
    def __init__(self, settings: Settings):
        self.security_utils = SecurityUtils(rounds=settings.PASSWORD_HASH_ROUNDS)

        # JWT settings
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return self.security_utils.verify_password(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        """Hash a password"""
        return self.security_utils.hash_password(password)

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create JWT access token"""
        to_encode = data.copy()
        now = datetime.now(timezone.utc)

        if expires_delta:
            expire = now + expires_delta
        else:
            expire = now + timedelta(minutes=self.access_token_expire_minutes)

        to_encode.update({
            "exp": expire,
            "iat": now,
            "type": "access"
        })

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str, token_type: str = "access") -> Dict[str, Any]:
        """Verify and decode JWT token"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except JWTError:
            raise AuthenticationError("Could not validate credentials")

        if payload.get("type") != token_type:
            raise AuthenticationError("Invalid token type")

        return payload

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        full_name: Optional[str] = None,
    ) -> User:
        """Create an account with a hashed password"""
        if await self.get_user_by_email(db, email):
            raise ValidationError("User with this email already exists")

        try:
            password_hash = self.get_password_hash(password)
        except ValueError as e:
            raise ValidationError(str(e))

        user = User(
            email=email.lower(),
            password_hash=password_hash,
            full_name=full_name,
            role=role,
        )
        db.add(user)
        await db.commit()

        logger.info("User created", user_id=user.id, role=user.role.value)
        return user

    async def ensure_admin(self, db: AsyncSession, email: str, password: str) -> User:
        """Create the configured admin account unless it already exists"""
        user = await self.get_user_by_email(db, email)
        if user is not None:
            if not user.is_admin:
                logger.warning("Configured admin email belongs to a non-admin account", user_id=user.id)
            return user

        return await self.create_user(db, email, password, role=UserRole.ADMIN, full_name="Administrator")

    async def authenticate_user(
        self,
        login_data: UserLogin,
        db: AsyncSession
    ) -> Tuple[User, TokenResponse]:
        """Check credentials and issue an access token"""
        user = await self.get_user_by_email(db, login_data.email)

        if not user or not self.verify_password(login_data.password, user.password_hash):
            logger.warning("Login failed", reason="invalid_credentials", email=login_data.email)
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            logger.warning("Login failed", reason="account_disabled", user_id=user.id)
            raise AuthenticationError("Account is disabled")

        access_token = self.create_access_token(
            data={"sub": user.id, "email": user.email, "role": user.role.value}
        )

        user.last_login_at = datetime.now(timezone.utc)
        await db.commit()

        logger.info("Login succeeded", user_id=user.id, role=user.role.value)

        token_response = TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.access_token_expire_minutes * 60
        )
        return user, token_response

    async def get_current_user(self, token: str, db: AsyncSession) -> User:
        """Get current user from JWT token"""
        payload = self.verify_token(token)
        user_id = payload.get("sub")

        if not user_id:
            raise AuthenticationError("Invalid token payload")

        user = await db.get(User, user_id)
        if not user:
            raise AuthenticationError("User not found")

        if not user.is_active:
            raise AuthenticationError("User account is disabled")

        return user

    def authorize_admin(self, user: User) -> User:
        """Ensure the authenticated user holds the admin role"""
        if not user.is_admin:
            raise AuthorizationError("Admin access required")
        return user
