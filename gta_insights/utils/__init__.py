"""
Utility functions for the application.
"""

from .error_handler import (
    AppError,
    InvalidRequestError,
    handle_error,
    format_error_response,
    log_exception
)

__all__ = [
    'AppError',
    'InvalidRequestError',
    'handle_error',
    'format_error_response',
    'log_exception'
]
