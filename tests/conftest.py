import os
import json

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

# Settings refuse to load without an API key
os.environ.setdefault("GEMINI_API_KEY", "test-api-key")

from gta_insights.app import create_app
from gta_insights.config.settings import Settings
from gta_insights.services.chat_service import ChatSessionManager
from gta_insights.services.controller import InsightsController, get_controller
from gta_insights.services.insights_service import InsightsOrchestrator

SAMPLE_RESPONSE = {
    "title": "Brampton Growth Outlook",
    "summary": "Brampton continues to be one of the fastest growing cities in the GTA.",
    "keyPoints": [{"title": "Immigration", "description": "Drives most of the growth."}],
    "populationTrend": [
        {"year": 2030, "population": 890000, "type": "Projected"},
        {"year": 2016, "population": 593638, "type": "Historical"},
        {"year": 2021, "population": 656480, "type": "Historical"},
    ],
    "urbanSprawlPredictions": [{"title": "Northwest expansion", "description": "Along the Heritage Heights corridor."}],
    "predictedHotspots": [{"name": "Heritage Heights", "locationQuery": "Heritage Heights, Brampton", "reason": "Planned transit."}],
}


@pytest.fixture
def sample_response():
    return json.loads(json.dumps(SAMPLE_RESPONSE))


@pytest.fixture
def invoke():
    """Stand-in for genai_service.generate_content."""
    return AsyncMock(return_value=json.dumps(SAMPLE_RESPONSE))


@pytest.fixture
def controller(invoke):
    return InsightsController(InsightsOrchestrator(invoke), ChatSessionManager(invoke))


@pytest.fixture
def app(controller):
    app = create_app(Settings())
    app.dependency_overrides[get_controller] = lambda: controller
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
