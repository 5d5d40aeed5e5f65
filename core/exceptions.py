"""
Recipe Box Exceptions
Domain errors raised by services and mapped to HTTP statuses by the endpoints
"""

from typing import Optional


class RecipeBoxError(Exception):
    """Base class for all service errors"""

    status_code: int = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
        self.message = message


class ValidationError(RecipeBoxError):
    """Missing or malformed input"""
    status_code = 400


class ConflictError(RecipeBoxError):
    """Unique field already taken"""
    status_code = 409


class NotFoundError(RecipeBoxError):
    """User or saved recipe absent"""
    status_code = 404


class AuthenticationError(RecipeBoxError):
    """Missing, invalid or expired credentials"""
    status_code = 401


class InvalidCredentialsError(AuthenticationError):
    """Password did not match the stored hash"""
    pass


class UpstreamError(RecipeBoxError):
    """Recipe provider call failed"""

    status_code = 500

    def __init__(
        self,
        message: str = "Recipe provider error",
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body
