"""Brutal tests for Rich display helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO

from rich.console import Console

from devpilot.cli.output import (
    print_error,
    print_extraction,
    print_info,
    print_prediction,
    print_schedule,
)
from devpilot.models.intent import Entities, ExtractionResult, IntentType
from devpilot.models.prediction import DeploymentSchedule, Prediction


def _capture(func, *args, **kwargs) -> str:
    """Capture Rich output by temporarily replacing the module console."""
    import devpilot.cli.output as mod
    buf = StringIO()
    original = mod.console
    mod.console = Console(file=buf, width=120)
    try:
        func(*args, **kwargs)
    finally:
        mod.console = original
    return buf.getvalue()


class TestPrintExtraction:
    def test_displays_intent(self):
        result = ExtractionResult(
            intent=IntentType.DEPLOY_REQUEST,
            entities=Entities(environment="staging", branch="feature-x"),
            confidence=0.5,
            source="keyword",
        )
        output = _capture(print_extraction, result)
        assert "DEPLOY_REQUEST" in output
        assert "50%" in output
        assert "keyword" in output
        assert "branch=feature-x" in output
        assert "environment=staging" in output

    def test_hides_empty_entities(self):
        result = ExtractionResult(intent=IntentType.HELP_REQUEST, confidence=0.9)
        output = _capture(print_extraction, result)
        assert "Entities" not in output


class TestPrintPrediction:
    def test_displays_metrics_and_risks(self):
        prediction = Prediction(
            estimated_duration=900,
            failure_probability=0.45,
            estimated_cost=0.05,
            confidence=0.3,
            risk_factors=["Late day deployment"],
            recommendations=["Deploy earlier in the day for better support coverage"],
        )
        output = _capture(print_prediction, prediction)
        assert "900s" in output
        assert "45%" in output
        assert "$0.05" in output
        assert "Late day deployment" in output
        assert "Deploy earlier in the day" in output

    def test_no_risk_table_when_clean(self):
        prediction = Prediction(
            estimated_duration=600,
            failure_probability=0.1,
            estimated_cost=0.04,
            confidence=0.3,
        )
        assert "Risk Factors" not in _capture(print_prediction, prediction)


class TestPrintSchedule:
    def test_displays_schedule(self):
        schedule = DeploymentSchedule(
            suggested_time=datetime(2024, 3, 13, 3, tzinfo=timezone.utc),
            reason="Low traffic period with high success rate",
            traffic_impact="low",
            success_probability=90,
            estimated_rollback_time=5,
            alternative_times=[datetime(2024, 3, 14, 3, tzinfo=timezone.utc)],
        )
        output = _capture(print_schedule, schedule)
        assert "2024-03-13T03:00:00+00:00" in output
        assert "90%" in output
        assert "5 minutes" in output
        assert "2024-03-14T03:00:00+00:00" in output


class TestPrintMessages:
    def test_error(self):
        output = _capture(print_error, "Something broke")
        assert "Something broke" in output
        assert "Error" in output

    def test_info(self):
        assert "just so you know" in _capture(print_info, "just so you know")
