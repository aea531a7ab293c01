import json
import logging
from typing import Awaitable, Callable, Optional

from gta_insights.models.schemas import AnalyticsRecord
from gta_insights.services import genai_service
from gta_insights.services.error_classifier import (
    EmptyResponseError,
    MalformedResponseError,
    UserFacingError,
    classify,
)
from gta_insights.services.response_normalizer import normalize
from gta_insights.services.schema_contract import build_analysis_config, build_analysis_prompt
from gta_insights.utils.error_handler import InvalidRequestError, log_exception

logger = logging.getLogger(__name__)

Invoke = Callable[..., Awaitable[Optional[str]]]


class InsightsOrchestrator:
    """
    Fetches the urban-growth analysis for a location.

    One fetch is one structured-output model call. The result is either a fully
    normalized AnalyticsRecord or a classified UserFacingError; nothing partial
    is returned and nothing is retried.
    """

    def __init__(self, invoke: Optional[Invoke] = None):
        self._invoke = invoke or genai_service.generate_content

    async def fetch(self, location: str) -> AnalyticsRecord:
        """
        Args:
            location: Place to analyse, e.g. "Brampton"

        Returns:
            The normalized AnalyticsRecord

        Raises:
            InvalidRequestError: location is blank
            UserFacingError: the model call or its response failed
        """
        if not location or not location.strip():
            raise InvalidRequestError("Location must not be empty.")

        prompt = build_analysis_prompt(location)
        logger.info(f"Fetching population insights for: {location}")

        try:
            text = await self._invoke(prompt, build_analysis_config())

            json_text = text.strip() if text else ""
            if not json_text:
                logger.error(f"Gemini API returned empty text for {location}")
                raise EmptyResponseError("API returned an empty or invalid response.")

            try:
                parsed = json.loads(json_text)
            except json.JSONDecodeError as parse_error:
                logger.error(f"JSON parse error: {parse_error}")
                raise MalformedResponseError("Failed to parse Gemini API response JSON.") from parse_error

            record = normalize(parsed)
        except UserFacingError:
            raise
        except Exception as e:
            log_exception(e, f"insights fetch for {location}")
            raise classify(e) from e

        logger.debug(f"Parsed Data: {record}")
        return record
