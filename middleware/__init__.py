"""
Recipe Box Middleware
Custom middleware for security headers and logging
"""

from .security import SecurityMiddleware
from .logging import LoggingMiddleware

__all__ = [
    "SecurityMiddleware",
    "LoggingMiddleware",
]
