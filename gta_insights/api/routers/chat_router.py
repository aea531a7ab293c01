import logging
from fastapi import APIRouter, Depends

from gta_insights.models.schemas import ChatReply, ChatRequest, ConversationState
from gta_insights.services.controller import InsightsController, get_controller
from gta_insights.utils.error_handler import handle_error

logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

@router.post("/chat", response_model=ChatReply)
@handle_error
async def send_message(request: ChatRequest,
                       controller: InsightsController = Depends(get_controller)) -> ChatReply:
    """
    Send a chat turn to Urbo.

    Model failures do not produce an error response: the reply is an apology
    and `failed` is set.
    """
    turn = await controller.send_chat(request.message)
    return ChatReply(reply=turn.reply, failed=turn.failed, conversation=controller.conversation)

@router.get("/chat", response_model=ConversationState)
async def get_conversation(controller: InsightsController = Depends(get_controller)) -> ConversationState:
    """The current conversation."""
    return controller.conversation

@router.delete("/chat", response_model=ConversationState)
async def reset_conversation(controller: InsightsController = Depends(get_controller)) -> ConversationState:
    """Dismiss the chat; the next message starts a fresh conversation."""
    logger.info("Chat session reset")
    return controller.reset_chat()
