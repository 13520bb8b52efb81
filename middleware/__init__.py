"""
RecipeBox Middleware
Custom middleware for request logging
"""

from .logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
