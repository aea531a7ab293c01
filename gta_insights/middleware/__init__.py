"""
HTTP middleware for the application.
"""

from .rate_limit import RateLimitMiddleware

__all__ = ['RateLimitMiddleware']
