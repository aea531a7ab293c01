"""
Configuration for the application.
"""

from .settings import Settings, ConfigurationError, get_settings

__all__ = ['Settings', 'ConfigurationError', 'get_settings']
