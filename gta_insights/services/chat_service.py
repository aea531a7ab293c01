import logging
from typing import Awaitable, Callable, List, NamedTuple, Optional, Sequence, Tuple

from google.genai import types

from gta_insights.models.schemas import ChatMessage, Role
from gta_insights.services import genai_service
from gta_insights.services.error_classifier import describe_chat_failure
from gta_insights.services.schema_contract import build_chat_config
from gta_insights.utils.error_handler import InvalidRequestError

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response received from Gemini."
APOLOGY_TEMPLATE = "Sorry, something went wrong: {detail}"

Invoke = Callable[..., Awaitable[Optional[str]]]


class ChatTurn(NamedTuple):
    """Result of one send: the extended conversation and the text appended for the model."""
    conversation: Tuple[ChatMessage, ...]
    reply: str
    failed: bool


def to_contents(conversation: Sequence[ChatMessage]) -> List[types.Content]:
    """Translate stored messages into Gemini turns, one per message, in order."""
    return [
        types.Content(role=message.role.value, parts=[types.Part.from_text(text=message.text)])
        for message in conversation
    ]


class ChatSessionManager:
    """
    Sends chat turns to Urbo.

    The user message is appended before the call is made, and a failed call is
    answered with an apology message instead of an error, so every send grows
    the conversation by exactly two messages.
    """

    def __init__(self, invoke: Optional[Invoke] = None):
        self._invoke = invoke or genai_service.generate_content

    async def send(self, conversation: Sequence[ChatMessage], text: str) -> ChatTurn:
        if not text or not text.strip():
            raise InvalidRequestError("Message must not be empty.")

        updated = tuple(conversation) + (ChatMessage(role=Role.USER, text=text),)

        try:
            answer = await self._invoke(to_contents(updated), build_chat_config())
        except Exception as e:
            logger.error(f"Error in chatbot service: {e}")
            reply = APOLOGY_TEMPLATE.format(detail=describe_chat_failure(e))
            return ChatTurn(updated + (ChatMessage(role=Role.MODEL, text=reply),), reply, True)

        reply = (answer or "").strip() or NO_RESPONSE_TEXT
        return ChatTurn(updated + (ChatMessage(role=Role.MODEL, text=reply),), reply, False)
