import asyncio
import json

import pytest
from unittest.mock import AsyncMock
from google.genai import types

from gta_insights.services.error_classifier import ErrorKind, UserFacingError
from gta_insights.services.insights_service import InsightsOrchestrator
from gta_insights.services.schema_contract import RESPONSE_MIME_TYPE, RESPONSE_SCHEMA
from gta_insights.utils.error_handler import InvalidRequestError


def fetch(invoke, location="Brampton"):
    return asyncio.run(InsightsOrchestrator(invoke).fetch(location))


def test_fetch_returns_normalized_record(invoke):
    record = fetch(invoke)

    assert record.title == "Brampton Growth Outlook"
    assert [p.year for p in record.population_trend] == [2016, 2021, 2030]


def test_fetch_sends_prompt_with_structured_output_config(invoke):
    fetch(invoke, "Markham")

    prompt, config = invoke.await_args.args
    assert "Act as an expert urban planning analyst" in prompt
    assert "for Markham." in prompt
    assert isinstance(config, types.GenerateContentConfig)
    assert config.response_mime_type == RESPONSE_MIME_TYPE
    assert config.response_schema == RESPONSE_SCHEMA
    invoke.assert_awaited_once()


@pytest.mark.parametrize("text", ["", "   \n", None])
def test_blank_response_is_empty_response(text):
    with pytest.raises(UserFacingError) as excinfo:
        fetch(AsyncMock(return_value=text))

    assert excinfo.value.kind is ErrorKind.EMPTY_RESPONSE
    assert excinfo.value.message == "API returned an empty or invalid response."


def test_unparseable_response_is_malformed():
    with pytest.raises(UserFacingError) as excinfo:
        fetch(AsyncMock(return_value="Here is your analysis: {"))

    assert excinfo.value.kind is ErrorKind.MALFORMED_RESPONSE
    assert excinfo.value.message == "Failed to parse Gemini API response JSON."


def test_json_that_is_not_an_object_is_malformed():
    with pytest.raises(UserFacingError) as excinfo:
        fetch(AsyncMock(return_value=json.dumps([1, 2, 3])))

    assert excinfo.value.kind is ErrorKind.MALFORMED_RESPONSE


def test_model_failures_are_classified():
    with pytest.raises(UserFacingError) as excinfo:
        fetch(AsyncMock(side_effect=RuntimeError("429 RESOURCE_EXHAUSTED")))
    assert excinfo.value.kind is ErrorKind.QUOTA_EXCEEDED

    with pytest.raises(UserFacingError) as excinfo:
        fetch(AsyncMock(side_effect=RuntimeError("503 UNAVAILABLE")))
    assert excinfo.value.kind is ErrorKind.SERVICE_OVERLOADED

    with pytest.raises(UserFacingError) as excinfo:
        fetch(AsyncMock(side_effect=OSError("network is unreachable")))
    assert excinfo.value.kind is ErrorKind.UNKNOWN_FAILURE
    assert excinfo.value.message == "Failed to retrieve population data. Please check API or network."


def test_blank_location_is_rejected_without_a_call(invoke):
    with pytest.raises(InvalidRequestError):
        fetch(invoke, "  ")

    invoke.assert_not_awaited()


def test_no_retry_on_failure():
    invoke = AsyncMock(side_effect=RuntimeError("UNAVAILABLE"))

    with pytest.raises(UserFacingError):
        fetch(invoke)

    assert invoke.await_count == 1
