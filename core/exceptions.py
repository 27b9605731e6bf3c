"""
Recipe Catalog Error Taxonomy
Application errors carrying the HTTP status and error kind reported to clients
"""

from typing import Dict, Optional


class AppError(Exception):
    """Base class for errors converted to ``{error, message}`` responses"""

    status_code = 500
    error = "ServerError"

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(AppError):
    """Malformed or missing input, or an unresolvable reference"""

    status_code = 400
    error = "ValidationError"


class NotFoundError(AppError):
    """Unknown identifier"""

    status_code = 404
    error = "NotFoundError"


class AuthenticationError(AppError):
    """Missing, malformed or expired credentials"""

    status_code = 401
    error = "AuthenticationError"

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    """Authenticated, but the role is insufficient"""

    status_code = 403
    error = "AuthorizationError"


class ServerError(AppError):
    """Unexpected failure such as an unreachable database"""

    status_code = 500
    error = "ServerError"


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AuthenticationError",
    "AuthorizationError",
    "ServerError",
]
