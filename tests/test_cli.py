import json

from unittest.mock import AsyncMock, patch

from gta_insights.cli import main, parse_arguments


def test_parse_arguments():
    args = parse_arguments(["insights", "Brampton"])
    assert args.command == "insights"
    assert args.location == "Brampton"

    assert parse_arguments(["serve", "--port", "9000"]).port == 9000


def test_insights_command_prints_record(controller, capsys):
    with patch("gta_insights.cli.genai_service.initialize_genai", AsyncMock(return_value=True)), \
            patch("gta_insights.cli.InsightsController", return_value=controller):
        exit_code = main(["insights", "Brampton"])

    assert exit_code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["title"] == "Brampton Growth Outlook"
    assert [p["year"] for p in printed["populationTrend"]] == [2016, 2021, 2030]


def test_insights_command_reports_classified_error(controller, invoke, capsys):
    invoke.side_effect = RuntimeError("503 UNAVAILABLE")

    with patch("gta_insights.cli.genai_service.initialize_genai", AsyncMock(return_value=True)), \
            patch("gta_insights.cli.InsightsController", return_value=controller):
        exit_code = main(["insights", "Brampton"])

    assert exit_code == 1
    assert "Gemini model is currently overloaded" in capsys.readouterr().err


def test_missing_api_key_exits_with_configuration_error(monkeypatch, capsys):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setattr("gta_insights.config.settings._settings", None)
    monkeypatch.setattr("gta_insights.cli.load_dotenv", lambda: None)

    assert main(["insights", "Brampton"]) == 2
    assert "GEMINI_API_KEY" in capsys.readouterr().err
