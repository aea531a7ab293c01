"""
Pure state transitions for the insights view and the chat session.

Each function takes the current state and an event and returns a new state;
states are frozen pydantic models, so nothing is mutated in place.

Chat turns move through:
    awaiting_send -> turn_appended -> resolved_success | resolved_with_apology
"""

from typing import Sequence

from gta_insights.models.schemas import (
    AnalyticsRecord,
    ChatMessage,
    ConversationState,
    FetchState,
    FetchStatus,
    TurnPhase,
)


def fetch_started(state: FetchState, location: str, token: int) -> FetchState:
    # The previous record stays visible while the new one loads
    return state.model_copy(update={
        "status": FetchStatus.LOADING,
        "location": location,
        "error_message": None,
        "error_kind": None,
        "request_token": token,
    })


def fetch_succeeded(state: FetchState, token: int, record: AnalyticsRecord) -> FetchState:
    if token != state.request_token:
        return state
    return state.model_copy(update={"status": FetchStatus.SUCCESS, "data": record})


def fetch_failed(state: FetchState, token: int, message: str, kind: str) -> FetchState:
    if token != state.request_token:
        return state
    return state.model_copy(update={
        "status": FetchStatus.ERROR,
        "error_message": message,
        "error_kind": kind,
    })


def turn_appended(state: ConversationState, message: ChatMessage) -> ConversationState:
    return ConversationState(
        messages=state.messages + (message,),
        is_loading=True,
        phase=TurnPhase.TURN_APPENDED,
    )


def turn_resolved(state: ConversationState, conversation: Sequence[ChatMessage], failed: bool) -> ConversationState:
    return ConversationState(
        messages=tuple(conversation),
        is_loading=False,
        phase=TurnPhase.RESOLVED_WITH_APOLOGY if failed else TurnPhase.RESOLVED_SUCCESS,
    )


def conversation_reset() -> ConversationState:
    return ConversationState()
