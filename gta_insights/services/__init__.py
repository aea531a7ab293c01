"""
Service layer for business logic.
"""

from .genai_service import initialize_genai, get_genai_status, generate_content
from .error_classifier import ErrorKind, UserFacingError, classify, describe_chat_failure
from .response_normalizer import normalize
from .insights_service import InsightsOrchestrator
from .chat_service import ChatSessionManager, ChatTurn
from .controller import InsightsController, StaleResultError, ChatBusyError, get_controller

__all__ = [
    'initialize_genai', 'get_genai_status', 'generate_content',
    'ErrorKind', 'UserFacingError', 'classify', 'describe_chat_failure',
    'normalize',
    'InsightsOrchestrator',
    'ChatSessionManager', 'ChatTurn',
    'InsightsController', 'StaleResultError', 'ChatBusyError', 'get_controller'
]
