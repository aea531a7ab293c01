import logging
from typing import Any

from pydantic import ValidationError

from gta_insights.models.schemas import AnalyticsRecord, PopulationPoint, SEQUENCE_FIELDS
from gta_insights.services.error_classifier import MalformedResponseError

logger = logging.getLogger(__name__)


def _year_sort_key(point: PopulationPoint):
    # Entries without a year go after the dated ones
    if point.year is None:
        return (1, 0)
    return (0, point.year)


def normalize(raw: Any) -> AnalyticsRecord:
    """
    Repair a parsed model response into an AnalyticsRecord.

    Sequence fields that are missing or not lists become empty lists, and
    populationTrend is sorted by year (stable, so equal years keep their order).
    Missing scalar fields are tolerated.

    Args:
        raw: The value returned by json.loads on the model text

    Returns:
        The normalized AnalyticsRecord

    Raises:
        MalformedResponseError: raw is not a JSON object, or its entries do not
            match the types requested from the model
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(raw).__name__}")

    repaired = dict(raw)
    for field in SEQUENCE_FIELDS:
        value = repaired.get(field)
        if not isinstance(value, list):
            logger.warning(f"No {field} found in API response.")
            repaired[field] = []

    try:
        record = AnalyticsRecord.model_validate(repaired)
    except ValidationError as e:
        logger.error(f"Response does not match the analytics contract: {e}")
        raise MalformedResponseError("Response does not match the analytics contract") from e

    # Years are compared after coercion to int
    record.population_trend = sorted(record.population_trend, key=_year_sort_key)
    return record
