"""
API package for the application.
"""

from .routers import (
    insights_router,
    chat_router,
    health_router
)

__all__ = [
    'insights_router',
    'chat_router',
    'health_router'
]
