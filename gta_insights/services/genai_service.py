import logging
import asyncio
from typing import Dict, Any, List, Optional, Union
from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

# Global variables for GenAI state
GENAI_INITIALIZED = False
GENAI_INITIALIZATION_ERROR = None
GENAI_CLIENT = None
GENAI_MODEL_NAME = None

Contents = Union[str, List[types.Content]]

class GenAINotInitializedError(RuntimeError):
    """Raised when a model call is attempted before initialize_genai succeeded."""

async def initialize_genai(api_key: str, model_name: str) -> bool:
    """
    Initialize the GenAI client asynchronously.

    Args:
        api_key: The Google GenAI API key
        model_name: The model name to use

    Returns:
        True if initialization succeeded, False otherwise
    """
    global GENAI_INITIALIZED, GENAI_INITIALIZATION_ERROR

    try:
        # Run the actual initialization in a thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, lambda: _initialize_genai_sync(api_key, model_name)
        )
    except Exception as e:
        error_msg = f"Unexpected error during GenAI initialization: {str(e)}"
        logger.error(error_msg, exc_info=True)
        GENAI_INITIALIZATION_ERROR = error_msg
        GENAI_INITIALIZED = False
        return False

def _initialize_genai_sync(api_key: str, model_name: str) -> bool:
    """
    Synchronous GenAI initialization to be run in a thread pool.

    No test request is sent: every call counts against the free-tier quota.
    """
    global GENAI_INITIALIZED, GENAI_INITIALIZATION_ERROR, GENAI_CLIENT, GENAI_MODEL_NAME

    try:
        logger.info(f"Initializing Google GenAI client with model: {model_name}")

        GENAI_CLIENT = genai.Client(api_key=api_key)
        GENAI_MODEL_NAME = model_name
        GENAI_INITIALIZED = True
        GENAI_INITIALIZATION_ERROR = None

        logger.info(f"Google GenAI client initialized successfully with model: {model_name}")
        return True
    except Exception as e:
        error_msg = f"GenAI initialization failed: {str(e)}"
        logger.error(error_msg, exc_info=True)
        GENAI_INITIALIZATION_ERROR = error_msg
        GENAI_INITIALIZED = False
        return False

def get_genai_status() -> Dict[str, Any]:
    """
    Get the current status of GenAI.

    Returns:
        Dictionary with status information
    """
    return {
        "initialized": GENAI_INITIALIZED,
        "error": GENAI_INITIALIZATION_ERROR,
        "model": GENAI_MODEL_NAME if GENAI_INITIALIZED else None
    }

async def generate_content(contents: Contents, config: Optional[types.GenerateContentConfig] = None) -> Optional[str]:
    """
    Send one generate_content request and return the response text.

    Unlike the status helpers, this does not swallow failures: callers
    classify them (see error_classifier).

    Args:
        contents: A prompt string or the full list of conversation turns
        config: Generation config (structured-output schema, system instruction)

    Returns:
        The response text, or None if the model returned no text
    """
    if not GENAI_INITIALIZED or not GENAI_CLIENT:
        raise GenAINotInitializedError(f"GenAI not initialized: {GENAI_INITIALIZATION_ERROR}")

    # Run the generation in a thread pool to avoid blocking
    loop = asyncio.get_running_loop()
    start_time = loop.time()
    response = await loop.run_in_executor(
        None, lambda: _generate_content_sync(contents, config)
    )
    logger.info(f"Gemini API call completed in {loop.time() - start_time:.2f} seconds.")
    logger.debug(f"Raw Gemini response: {response}")

    return response.text if response is not None else None

def _generate_content_sync(contents: Contents, config: Optional[types.GenerateContentConfig]) -> types.GenerateContentResponse:
    return GENAI_CLIENT.models.generate_content(
        model=GENAI_MODEL_NAME,
        contents=contents,
        config=config,
    )
