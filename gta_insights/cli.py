"""
Command-line entry point for GTA Insights.

    gta-insights insights "Brampton"   print the analysis for a location as JSON
    gta-insights chat                  talk to Urbo in the terminal
    gta-insights serve                 run the HTTP API
"""

import sys
import asyncio
import argparse
import logging

from dotenv import load_dotenv

from gta_insights.app import configure_logging
from gta_insights.config.settings import ConfigurationError, get_settings
from gta_insights.services import genai_service
from gta_insights.services.controller import InsightsController
from gta_insights.services.error_classifier import UserFacingError

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="GTA Insights - urban growth analytics powered by Gemini")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    insights = subparsers.add_parser("insights", help="Fetch the analysis for a location")
    insights.add_argument("location", nargs="?", default=None,
                          help="Location to analyse (defaults to DEFAULT_LOCATION)")

    subparsers.add_parser("chat", help="Start an interactive chat with Urbo")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Server host address")
    serve.add_argument("--port", type=int, default=None, help="Server port")

    return parser.parse_args(argv)


async def _initialize(settings) -> None:
    if not await genai_service.initialize_genai(settings.gemini_api_key, settings.gemini_model):
        raise ConfigurationError(genai_service.get_genai_status()["error"])


async def run_insights(location: str, settings) -> int:
    await _initialize(settings)
    controller = InsightsController()
    try:
        state = await controller.load_insights(location)
    except UserFacingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(state.data.model_dump_json(by_alias=True, indent=2))
    return 0


async def run_chat(settings) -> int:
    await _initialize(settings)
    controller = InsightsController()
    print("Urbo is listening. Type 'exit' or press Ctrl-D to leave.")
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line or line.strip().lower() in ("exit", "quit"):
            break
        if not line.strip():
            continue
        turn = await controller.send_chat(line.strip())
        print(f"Urbo: {turn.reply}")
    return 0


def main(argv=None) -> int:
    """Main entry point for the command line."""
    load_dotenv()
    args = parse_arguments(argv)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2

    configure_logging("DEBUG" if args.debug else settings.log_level)

    if args.command == "serve":
        import uvicorn
        uvicorn.run(
            "gta_insights.app:create_app",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=settings.reload,
        )
        return 0

    try:
        if args.command == "insights":
            return asyncio.run(run_insights(args.location or settings.default_location, settings))
        return asyncio.run(run_chat(settings))
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
