"""
Recipe Catalog Middleware
Custom middleware for request logging and timeouts
"""

from .logging import LoggingMiddleware
from .timeout import TimeoutMiddleware

__all__ = [
    "LoggingMiddleware",
    "TimeoutMiddleware",
]
