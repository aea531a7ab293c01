import json

import pytest
from unittest.mock import MagicMock
from google.genai import errors as genai_errors

from gta_insights.services.error_classifier import (
    CHAT_GENERIC_DETAIL,
    CHAT_QUOTA_DETAIL,
    ClassificationRule,
    EmptyResponseError,
    ErrorKind,
    MalformedResponseError,
    UserFacingError,
    classify,
    describe_chat_failure,
)


@pytest.mark.parametrize("raw, kind, message", [
    (RuntimeError("429 RESOURCE_EXHAUSTED. Too many requests"), ErrorKind.QUOTA_EXCEEDED,
     "API quota exceeded. Please wait a few minutes and try again."),
    (RuntimeError("You exceeded your current quota"), ErrorKind.QUOTA_EXCEEDED,
     "API quota exceeded. Please wait a few minutes and try again."),
    (RuntimeError("503 Service Unavailable"), ErrorKind.SERVICE_OVERLOADED,
     "Gemini model is currently overloaded. Please try again later."),
    (RuntimeError("status: UNAVAILABLE"), ErrorKind.SERVICE_OVERLOADED,
     "Gemini model is currently overloaded. Please try again later."),
    (EmptyResponseError("API returned an empty or invalid response."), ErrorKind.EMPTY_RESPONSE,
     "API returned an empty or invalid response."),
    (None, ErrorKind.EMPTY_RESPONSE, "API returned an empty or invalid response."),
    (MalformedResponseError("bad"), ErrorKind.MALFORMED_RESPONSE, "Failed to parse Gemini API response JSON."),
    (ConnectionError("Connection reset by peer"), ErrorKind.UNKNOWN_FAILURE,
     "Failed to retrieve population data. Please check API or network."),
])
def test_classification_table(raw, kind, message):
    error = classify(raw)

    assert isinstance(error, UserFacingError)
    assert error.kind is kind
    assert error.message == message
    assert error.details == {"kind": kind.value}


def test_json_decode_error_is_malformed():
    with pytest.raises(json.JSONDecodeError) as excinfo:
        json.loads("{not json")

    assert classify(excinfo.value).kind is ErrorKind.MALFORMED_RESPONSE


def test_table_order_decides_precedence():
    assert classify(RuntimeError("quota exceeded, 503")).kind is ErrorKind.QUOTA_EXCEEDED
    # A provider error that happens to say "503" is not reported as a parse failure
    assert classify(MalformedResponseError("upstream said 503")).kind is ErrorKind.SERVICE_OVERLOADED


def test_classification_is_deterministic():
    kinds = {classify(RuntimeError("UNAVAILABLE")).kind for _ in range(5)}
    assert kinds == {ErrorKind.SERVICE_OVERLOADED}


def test_plain_status_strings_are_accepted():
    assert classify("RESOURCE_EXHAUSTED").kind is ErrorKind.QUOTA_EXCEEDED
    assert classify("   ").kind is ErrorKind.EMPTY_RESPONSE


def test_exception_without_message_is_unknown():
    assert classify(RuntimeError()).kind is ErrorKind.UNKNOWN_FAILURE


def test_structured_api_error_fields_are_used():
    api_error = MagicMock(spec=genai_errors.APIError)
    api_error.code = 429
    api_error.status = "RESOURCE_EXHAUSTED"

    assert classify(api_error).kind is ErrorKind.QUOTA_EXCEEDED


def test_status_codes():
    assert classify(RuntimeError("quota")).status_code == 429
    assert classify(RuntimeError("503")).status_code == 503
    assert classify(None).status_code == 502
    assert classify(RuntimeError("boom")).status_code == 500


def test_already_classified_error_passes_through():
    error = classify(RuntimeError("quota"))
    assert classify(error) is error


def test_custom_rule_table():
    rules = (ClassificationRule(ErrorKind.SERVICE_OVERLOADED, "Busy", 503,
                                lambda error, signal: "timeout" in signal),)

    assert classify(TimeoutError("read timeout"), rules).message == "Busy"
    assert classify(RuntimeError("quota"), rules).kind is ErrorKind.UNKNOWN_FAILURE


def test_chat_failure_details():
    assert describe_chat_failure(RuntimeError("429 RESOURCE_EXHAUSTED")) == CHAT_QUOTA_DETAIL
    assert describe_chat_failure(RuntimeError("quota")) == CHAT_GENERIC_DETAIL
    assert describe_chat_failure(RuntimeError("503 UNAVAILABLE")) == CHAT_GENERIC_DETAIL
