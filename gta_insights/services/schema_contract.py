"""
Prompt and structured-output contract for the Gemini calls.

RESPONSE_SCHEMA mirrors AnalyticsRecord field for field (wire names). Any change
to the record must be made here too; tests/test_schema_contract.py checks that
the two agree.
"""

from google.genai import types

ANALYSIS_PROMPT_TEMPLATE = """
Act as an expert urban planning analyst for the Greater Toronto Area.
Based on the provided context about predicting urban sprawl, generate a detailed analysis for {location}.
"""

CHAT_SYSTEM_INSTRUCTION = (
    "You are Urbo, a helpful AI assistant powered by Google Gemini. "
    "You specialize in GTA population growth and urban planning."
)

RESPONSE_MIME_TYPE = "application/json"


def _object(**properties: types.Schema) -> types.Schema:
    return types.Schema(type=types.Type.OBJECT, properties=properties)


def _array_of(item: types.Schema) -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=item)


_STRING = types.Schema(type=types.Type.STRING)

RESPONSE_SCHEMA = _object(
    title=_STRING,
    summary=_STRING,
    keyPoints=_array_of(_object(title=_STRING, description=_STRING)),
    populationTrend=_array_of(_object(
        year=types.Schema(type=types.Type.INTEGER),
        population=types.Schema(type=types.Type.NUMBER),
        type=_STRING,
    )),
    urbanSprawlPredictions=_array_of(_object(title=_STRING, description=_STRING)),
    predictedHotspots=_array_of(_object(name=_STRING, locationQuery=_STRING, reason=_STRING)),
)


def build_analysis_prompt(location: str) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(location=location)


def build_analysis_config() -> types.GenerateContentConfig:
    """Generation config that constrains the reply to RESPONSE_SCHEMA."""
    return types.GenerateContentConfig(
        response_mime_type=RESPONSE_MIME_TYPE,
        response_schema=RESPONSE_SCHEMA,
    )


def build_chat_config() -> types.GenerateContentConfig:
    """Plain-text generation with the Urbo persona."""
    return types.GenerateContentConfig(
        system_instruction=CHAT_SYSTEM_INSTRUCTION,
    )
