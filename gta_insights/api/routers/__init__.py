"""
API routers for the application.
"""

from .insights_router import router as insights_router
from .chat_router import router as chat_router
from .health_router import router as health_router

__all__ = [
    'insights_router',
    'chat_router',
    'health_router'
]
