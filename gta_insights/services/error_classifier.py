"""
Failure classification for Gemini calls.

The provider does not give us a reliable error taxonomy, so failures are matched
against an ordered rule table: the first rule that matches wins, and the order
is significant (a message mentioning both "quota" and "503" is a quota error).
Structured fields of google.genai APIError (code, status) are folded into the
matched text so that they are seen even when the message omits them.
"""

import json
import logging
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional, Sequence

from google.genai import errors as genai_errors

from gta_insights.utils.error_handler import AppError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    QUOTA_EXCEEDED = "QuotaExceeded"
    SERVICE_OVERLOADED = "ServiceOverloaded"
    EMPTY_RESPONSE = "EmptyResponse"
    MALFORMED_RESPONSE = "MalformedResponse"
    UNKNOWN_FAILURE = "UnknownFailure"


class EmptyResponseError(Exception):
    """The model returned no text."""


class MalformedResponseError(Exception):
    """The model returned text that is not a usable analytics object."""


class UserFacingError(AppError):
    """A classified failure with a message fit to show to the user."""

    def __init__(self, kind: ErrorKind, message: str, status_code: int):
        super().__init__(message, status_code=status_code, details={"kind": kind.value})
        self.kind = kind


class ClassificationRule(NamedTuple):
    kind: ErrorKind
    message: str
    status_code: int
    matches: Callable[[Any, str], bool]


def _contains(*needles: str) -> Callable[[Any, str], bool]:
    return lambda error, signal: any(needle in signal for needle in needles)


def _is_empty(error: Any, signal: str) -> bool:
    if isinstance(error, str):
        return not error.strip()
    return error is None or isinstance(error, EmptyResponseError)


def _is_malformed(error: Any, signal: str) -> bool:
    return isinstance(error, (MalformedResponseError, json.JSONDecodeError))


FETCH_RULES: Sequence[ClassificationRule] = (
    ClassificationRule(ErrorKind.QUOTA_EXCEEDED,
                       "API quota exceeded. Please wait a few minutes and try again.",
                       429, _contains("RESOURCE_EXHAUSTED", "quota")),
    ClassificationRule(ErrorKind.SERVICE_OVERLOADED,
                       "Gemini model is currently overloaded. Please try again later.",
                       503, _contains("503", "UNAVAILABLE")),
    ClassificationRule(ErrorKind.EMPTY_RESPONSE,
                       "API returned an empty or invalid response.",
                       502, _is_empty),
    ClassificationRule(ErrorKind.MALFORMED_RESPONSE,
                       "Failed to parse Gemini API response JSON.",
                       502, _is_malformed),
)

FALLBACK_RULE = ClassificationRule(ErrorKind.UNKNOWN_FAILURE,
                                   "Failed to retrieve population data. Please check API or network.",
                                   500, lambda error, signal: True)

CHAT_QUOTA_DETAIL = "You have reached the free Gemini API request limit. Try again later."
CHAT_GENERIC_DETAIL = "Sorry, I couldn't get a response from the AI. Please try again."


def error_signal(raw_error: Any) -> str:
    """Text the rule table is matched against."""
    if raw_error is None:
        return ""
    if isinstance(raw_error, BaseException):
        parts = [str(raw_error)]
        if isinstance(raw_error, genai_errors.APIError):
            parts.extend(str(part) for part in (raw_error.code, raw_error.status) if part)
        return " ".join(parts)
    return str(raw_error)


def classify(raw_error: Any, rules: Optional[Sequence[ClassificationRule]] = None) -> UserFacingError:
    """
    Map a raw failure to a user-facing error.

    Args:
        raw_error: An exception, a status/message string, or None for a missing response
        rules: Rule table to use instead of FETCH_RULES

    Returns:
        The classified UserFacingError (not raised)
    """
    if isinstance(raw_error, UserFacingError):
        return raw_error

    signal = error_signal(raw_error)
    for rule in (FETCH_RULES if rules is None else rules):
        if rule.matches(raw_error, signal):
            break
    else:
        rule = FALLBACK_RULE

    logger.debug(f"Classified failure as {rule.kind.value}: {signal!r}")
    return UserFacingError(rule.kind, rule.message, rule.status_code)


def describe_chat_failure(raw_error: Any) -> str:
    """Detail embedded in the apology the chat shows instead of an error."""
    if "RESOURCE_EXHAUSTED" in error_signal(raw_error):
        return CHAT_QUOTA_DETAIL
    return CHAT_GENERIC_DETAIL
