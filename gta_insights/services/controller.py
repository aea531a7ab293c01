import itertools
import logging
from typing import Optional

from gta_insights.models.schemas import ChatMessage, ConversationState, FetchState, Role
from gta_insights.services import state_machine
from gta_insights.services.chat_service import APOLOGY_TEMPLATE, ChatSessionManager, ChatTurn
from gta_insights.services.error_classifier import UserFacingError, classify, describe_chat_failure
from gta_insights.services.insights_service import InsightsOrchestrator
from gta_insights.utils.error_handler import AppError, InvalidRequestError

logger = logging.getLogger(__name__)


class StaleResultError(AppError):
    """A fetch resolved after a newer fetch was issued; its result was discarded."""

    def __init__(self, location: str, latest_location: Optional[str]):
        super().__init__(
            f"Request for {location} was superseded by a newer request.",
            status_code=409,
            details={"location": location, "latestLocation": latest_location},
        )


class ChatBusyError(AppError):
    """A chat turn was sent while the previous one was still in flight."""

    def __init__(self):
        super().__init__("Urbo is still answering the previous message.", status_code=409)


class InsightsController:
    """
    Owns the one FetchState and the one ConversationState of the application.

    Fetches are tagged with increasing request tokens and only the latest one
    may commit its result. Chat turns are serialized by the loading flag.
    """

    def __init__(self,
                 orchestrator: Optional[InsightsOrchestrator] = None,
                 chat_manager: Optional[ChatSessionManager] = None):
        self.orchestrator = orchestrator or InsightsOrchestrator()
        self.chat_manager = chat_manager or ChatSessionManager()
        self.fetch_state = FetchState()
        self.conversation = ConversationState()
        self._tokens = itertools.count(1)
        self._chat_generation = 0

    async def load_insights(self, location: str) -> FetchState:
        location = (location or "").strip()
        if not location:
            raise InvalidRequestError("Location must not be empty.")

        token = next(self._tokens)
        self.fetch_state = state_machine.fetch_started(self.fetch_state, location, token)

        try:
            record = await self.orchestrator.fetch(location)
        except UserFacingError as e:
            self._check_current(token, location)
            self.fetch_state = state_machine.fetch_failed(self.fetch_state, token, e.message, e.kind.value)
            raise
        except BaseException as e:
            # Cancelled (client gone, Ctrl-C): leave a retryable error instead of a stuck "loading"
            failure = classify(e)
            self.fetch_state = state_machine.fetch_failed(self.fetch_state, token, failure.message, failure.kind.value)
            raise

        self._check_current(token, location)
        self.fetch_state = state_machine.fetch_succeeded(self.fetch_state, token, record)
        logger.info(f"Insights loaded for {location} (request {token})")
        return self.fetch_state

    async def retry_insights(self) -> FetchState:
        if not self.fetch_state.location:
            raise InvalidRequestError("Nothing to retry: no location has been requested yet.")
        return await self.load_insights(self.fetch_state.location)

    def _check_current(self, token: int, location: str) -> None:
        if token != self.fetch_state.request_token:
            logger.warning(f"Discarding stale result for {location} (request {token}, "
                           f"latest {self.fetch_state.request_token})")
            raise StaleResultError(location, self.fetch_state.location)

    async def send_chat(self, text: str) -> ChatTurn:
        if self.conversation.is_loading:
            raise ChatBusyError()
        if not text or not text.strip():
            raise InvalidRequestError("Message must not be empty.")

        generation = self._chat_generation
        history = self.conversation.messages
        self.conversation = state_machine.turn_appended(self.conversation, ChatMessage(role=Role.USER, text=text))

        try:
            turn = await self.chat_manager.send(history, text)
        except BaseException as e:
            if generation == self._chat_generation:
                logger.warning(f"Chat turn interrupted ({type(e).__name__}); closing it with an apology")
                apology = ChatMessage(role=Role.MODEL, text=APOLOGY_TEMPLATE.format(detail=describe_chat_failure(e)))
                self.conversation = state_machine.turn_resolved(
                    self.conversation, self.conversation.messages + (apology,), failed=True)
            raise

        if generation != self._chat_generation:
            logger.info("Chat was reset while a turn was in flight; dropping the reply")
        else:
            self.conversation = state_machine.turn_resolved(self.conversation, turn.conversation, turn.failed)
        return turn

    def reset_chat(self) -> ConversationState:
        self._chat_generation += 1
        self.conversation = state_machine.conversation_reset()
        return self.conversation


_controller: Optional[InsightsController] = None


def get_controller() -> InsightsController:
    """Return the process-wide controller (FastAPI dependency)."""
    global _controller
    if _controller is None:
        _controller = InsightsController()
    return _controller
