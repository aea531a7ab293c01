"""
Data models for the application.
"""

from .schemas import (
    KeyPoint, PopulationPoint, SprawlPrediction, Hotspot, AnalyticsRecord,
    SEQUENCE_FIELDS, Role, ChatMessage, TurnPhase, ConversationState,
    FetchStatus, FetchState, InsightsRequest, ChatRequest, ChatReply
)

__all__ = [
    'KeyPoint', 'PopulationPoint', 'SprawlPrediction', 'Hotspot', 'AnalyticsRecord',
    'SEQUENCE_FIELDS', 'Role', 'ChatMessage', 'TurnPhase', 'ConversationState',
    'FetchStatus', 'FetchState', 'InsightsRequest', 'ChatRequest', 'ChatReply'
]
