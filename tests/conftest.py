"""Shared fixtures and mocks for all tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from devpilot.config.settings import Settings
from devpilot.engine.dispatcher import ActionDispatcher
from devpilot.engine.handler_registry import HandlerRegistry
from devpilot.models.analysis import (
    CostReport,
    FailureAnalysis,
    OptimizationReport,
    TrendInsights,
)
from devpilot.models.cicd import FailedJob, PipelineMetrics, PipelineStatus
from devpilot.models.intent import Entities, ExtractionResult, IntentType
from devpilot.risk.scoring import RiskScoringEngine

# Tuesday 2024-03-12 10:30 UTC
FIXED_NOW = datetime(2024, 3, 12, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def mock_settings(monkeypatch):
    monkeypatch.setenv("DEVPILOT_OPENAI_API_KEY", "sk-test-key-fake")
    monkeypatch.setenv("DEVPILOT_OPENAI_MODEL", "gpt-4o")
    monkeypatch.setenv("DEVPILOT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DEVPILOT_DEFAULT_PROJECT", "default-project")
    monkeypatch.setenv("DEVPILOT_REQUEST_TIMEOUT", "5")
    return Settings()


@pytest.fixture
def offline_settings(monkeypatch):
    monkeypatch.delenv("DEVPILOT_OPENAI_API_KEY", raising=False)
    return Settings()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def mock_cicd():
    cicd = AsyncMock()
    cicd.trigger_pipeline = AsyncMock(
        return_value={
            "pipeline": {
                "id": 9001,
                "iid": 42,
                "status": "pending",
                "webUrl": "https://ci.example.com/acme/widgets/-/pipelines/9001",
            },
            "errors": [],
        }
    )
    cicd.get_pipeline_status = AsyncMock(
        return_value=PipelineStatus(status="success", message="Pipeline #42 passed")
    )
    cicd.get_last_failed_job = AsyncMock(
        return_value=FailedJob(
            id="77",
            name="unit-tests",
            log="line 1\nModuleNotFoundError: No module named 'requests'",
            config={"image": "python:3.12"},
        )
    )
    cicd.get_job = AsyncMock(
        return_value=FailedJob(id="123", name="lint", log="E501 line too long")
    )
    cicd.get_pipeline_metrics = AsyncMock(
        return_value=PipelineMetrics(
            total_runs=40,
            successful_runs=36,
            failed_runs=4,
            success_rate=90.0,
            avg_duration=12.5,
        )
    )
    return cicd


@pytest.fixture
def mock_advisor():
    advisor = AsyncMock()
    advisor.analyze_optimizations = AsyncMock(
        return_value=OptimizationReport(
            original_cost=100.0,
            optimized_cost=70.0,
            savings=30.0,
            recommendations=["Enable dependency caching"],
        )
    )
    advisor.optimize_pipeline = AsyncMock(
        return_value=OptimizationReport(savings=25.0, recommendations=["Split test stage"])
    )
    advisor.analyze_pipeline_costs = AsyncMock(
        return_value=CostReport(
            current_cost=250.0,
            potential_savings=50.0,
            savings_percentage=20.0,
            recommendations=["Use spot runners", "Cache docker layers"],
            roi="3 months",
        )
    )
    advisor.analyze_performance_trends = AsyncMock(
        return_value=TrendInsights(
            insights=["Build stage is stable"],
            anomalies=["Duration spike on Friday"],
        )
    )
    advisor.analyze_failure = AsyncMock(
        return_value=FailureAnalysis(
            root_cause="Missing dependency",
            recommendation="Add requests to requirements.txt",
            code="pip install requests",
            language="bash",
            confidence=85,
        )
    )
    return advisor


@pytest.fixture
def mock_analytics():
    analytics = AsyncMock()
    analytics.get_average_duration = AsyncMock(
        return_value={"avg_duration": 300.0, "sample_size": 25, "stddev_duration": 20.0}
    )
    analytics.get_failure_patterns = AsyncMock(return_value=[])
    analytics.get_pipeline_trends = AsyncMock(return_value=[])
    return analytics


@pytest.fixture
def risk_engine(fixed_clock):
    return RiskScoringEngine(clock=fixed_clock)


@pytest.fixture
def dispatcher(mock_cicd, mock_advisor, risk_engine):
    registry = HandlerRegistry.default(
        cicd=mock_cicd, advisor=mock_advisor, risk_engine=risk_engine
    )
    return ActionDispatcher(registry, default_project="default-project")


@pytest.fixture
def make_extraction():
    def _make(intent: IntentType, source: str = "keyword", **slots):
        return ExtractionResult(
            intent=intent,
            entities=Entities(**slots),
            confidence=0.5,
            source=source,
        )
    return _make


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI chat completion response."""
    def _make(data: dict | str | None):
        message = MagicMock()
        message.content = data if data is None or isinstance(data, str) else json.dumps(data)
        choice = MagicMock()
        choice.message = message
        response = MagicMock()
        response.choices = [choice]
        return response
    return _make
