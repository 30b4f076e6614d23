"""Brutal tests for the risk scoring engine."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from devpilot.models.prediction import FRIDAY, PredictionInput
from devpilot.risk.policy import RiskPolicy
from devpilot.risk.scoring import (
    MODEL_CONFIDENCE,
    NO_HISTORY_CONFIDENCE,
    SPARSE_CONFIDENCE,
    WELL_SAMPLED_CONFIDENCE,
    RiskScoringEngine,
)

UTC = timezone.utc


def _input(files=0, hour=None, day=None):
    return PredictionInput(
        project_path="acme/widgets",
        ref="main",
        commit_files_count=files,
        hour_of_day=hour,
        day_of_week=day,
    )


class TestScoreDeploymentHeuristics:
    @pytest.mark.asyncio
    async def test_defaults_without_history(self, risk_engine):
        prediction = await risk_engine.score_deployment(_input())
        assert prediction.estimated_duration == 600
        assert prediction.failure_probability == 0.1
        assert prediction.estimated_cost == 0.04
        assert prediction.confidence == NO_HISTORY_CONFIDENCE
        assert prediction.risk_factors == []

    @pytest.mark.asyncio
    async def test_clock_supplies_hour_and_day(self):
        friday_evening = datetime(2024, 3, 15, 17, 0, tzinfo=UTC)
        engine = RiskScoringEngine(clock=lambda: friday_evening)
        prediction = await engine.score_deployment(_input())
        assert prediction.failure_probability == 0.35
        assert len(prediction.risk_factors) == 2

    @pytest.mark.asyncio
    async def test_weekend_adds_factor_only(self, risk_engine):
        prediction = await risk_engine.score_deployment(_input(hour=10, day=6))
        assert prediction.failure_probability == 0.1
        assert prediction.risk_factors == ["Weekend deployment - limited support available"]

    @pytest.mark.asyncio
    async def test_custom_policy(self, fixed_clock):
        policy = RiskPolicy(rules=[], default_duration=120, default_failure_probability=0.2)
        engine = RiskScoringEngine(policy=policy, clock=fixed_clock)
        prediction = await engine.score_deployment(_input(files=500, day=FRIDAY))
        assert prediction.estimated_duration == 120
        assert prediction.failure_probability == 0.2


class TestScoreDeploymentHistory:
    @pytest.mark.asyncio
    async def test_well_sampled_history(self, mock_analytics, fixed_clock):
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.estimated_duration == 300
        assert prediction.estimated_cost == 0.03
        assert prediction.confidence == WELL_SAMPLED_CONFIDENCE
        mock_analytics.get_average_duration.assert_awaited_once_with(
            "acme/widgets", "main", 30
        )

    @pytest.mark.asyncio
    async def test_sparse_history(self, mock_analytics, fixed_clock):
        mock_analytics.get_average_duration.return_value = {
            "avg_duration": 300.0,
            "sample_size": 3,
        }
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.confidence == SPARSE_CONFIDENCE

    @pytest.mark.asyncio
    async def test_failure_bucket_sets_base_probability(self, mock_analytics, fixed_clock):
        mock_analytics.get_failure_patterns.return_value = [
            {"hour_of_day": 10, "day_of_week": 2, "total_runs": 8, "failures": 2, "failure_rate": 25.0},
            {"hour_of_day": 11, "day_of_week": 2, "total_runs": 8, "failures": 8, "failure_rate": 100.0},
        ]
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.failure_probability == 0.25

    @pytest.mark.asyncio
    async def test_history_failure_degrades(self, mock_analytics, fixed_clock):
        mock_analytics.get_average_duration.side_effect = ConnectionError("warehouse down")
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.estimated_duration == 600
        assert prediction.confidence == NO_HISTORY_CONFIDENCE
        assert "Unable to analyze historical data" in prediction.risk_factors
        assert "Proceed with standard precautions" in prediction.recommendations

    @pytest.mark.asyncio
    async def test_empty_history_is_unavailable(self, mock_analytics, fixed_clock):
        mock_analytics.get_average_duration.return_value = None
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.confidence == NO_HISTORY_CONFIDENCE
        assert prediction.risk_factors == []


class TestScoreDeploymentModelOverride:
    @pytest.mark.asyncio
    async def test_endpoint_overrides(self, mock_analytics, fixed_clock):
        endpoint = AsyncMock()
        endpoint.predict = AsyncMock(
            return_value={"duration": 1234.4, "failure_probability": 0.3}
        )
        engine = RiskScoringEngine(
            analytics=mock_analytics, endpoint=endpoint, clock=fixed_clock
        )
        prediction = await engine.score_deployment(_input(files=7))
        assert prediction.estimated_duration == 1234
        assert prediction.failure_probability == 0.3
        assert prediction.confidence == MODEL_CONFIDENCE
        instance = endpoint.predict.await_args.args[0]
        assert instance["commit_files_count"] == 7
        assert instance["hour_of_day"] == 10
        assert instance["day_of_week"] == 2
        assert instance["historical_avg_duration"] == 300.0

    @pytest.mark.asyncio
    async def test_endpoint_probability_clamped(self, fixed_clock):
        endpoint = AsyncMock()
        endpoint.predict = AsyncMock(return_value={"duration": 60, "failure_probability": 3})
        engine = RiskScoringEngine(endpoint=endpoint, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.failure_probability == 0.95

    @pytest.mark.asyncio
    async def test_endpoint_failure_keeps_heuristic(self, fixed_clock):
        endpoint = AsyncMock()
        endpoint.predict = AsyncMock(side_effect=RuntimeError("no model deployed"))
        engine = RiskScoringEngine(endpoint=endpoint, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.estimated_duration == 600
        assert prediction.confidence == NO_HISTORY_CONFIDENCE

    @pytest.mark.asyncio
    async def test_endpoint_empty_reply_keeps_heuristic(self, fixed_clock):
        endpoint = AsyncMock()
        endpoint.predict = AsyncMock(return_value=None)
        engine = RiskScoringEngine(endpoint=endpoint, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.confidence == NO_HISTORY_CONFIDENCE

    @pytest.mark.asyncio
    async def test_endpoint_text_numbers_keep_heuristic(self, fixed_clock):
        endpoint = AsyncMock()
        endpoint.predict = AsyncMock(
            return_value={"duration": "900", "failure_probability": "0.2"}
        )
        engine = RiskScoringEngine(endpoint=endpoint, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.estimated_duration == 600
        assert prediction.confidence == NO_HISTORY_CONFIDENCE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [["900", "0.2"], {"duration": -5}, {"duration": {"p50": 1}}])
    async def test_endpoint_malformed_reply_keeps_heuristic(self, fixed_clock, reply):
        endpoint = AsyncMock()
        endpoint.predict = AsyncMock(return_value=reply)
        engine = RiskScoringEngine(endpoint=endpoint, clock=fixed_clock)
        prediction = await engine.score_deployment(_input())
        assert prediction.estimated_duration == 600
        assert prediction.confidence == NO_HISTORY_CONFIDENCE


class TestScoreDeploymentProperties:
    @pytest.mark.asyncio
    async def test_probability_never_exceeds_cap(self, mock_analytics, fixed_clock):
        mock_analytics.get_failure_patterns.return_value = [
            {"hour_of_day": h, "day_of_week": FRIDAY, "failure_rate": 90.0}
            for h in range(24)
        ]
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        for hour, files in itertools.product(range(0, 24, 3), (0, 51, 1000)):
            prediction = await engine.score_deployment(
                _input(files=files, hour=hour, day=FRIDAY)
            )
            assert 0.0 <= prediction.failure_probability <= 0.95

    @pytest.mark.asyncio
    async def test_monotonic_past_large_change_threshold(self, risk_engine):
        for hour, day in itertools.product((9, 16, 23), range(7)):
            small = await risk_engine.score_deployment(_input(files=50, hour=hour, day=day))
            for files in (51, 200):
                large = await risk_engine.score_deployment(
                    _input(files=files, hour=hour, day=day)
                )
                assert large.estimated_duration >= small.estimated_duration
                assert large.failure_probability >= small.failure_probability


class TestOptimalDeploymentTime:
    @pytest.mark.asyncio
    async def test_default_maintenance_window(self, risk_engine):
        schedule = await risk_engine.calculate_optimal_deployment_time(
            "acme/widgets", "staging"
        )
        assert schedule.suggested_time == datetime(2024, 3, 13, 3, tzinfo=UTC)
        assert schedule.traffic_impact == "low"
        assert schedule.reason == "Low traffic period with high success rate"
        assert schedule.success_probability == 90
        assert schedule.estimated_rollback_time == 5
        assert len(schedule.alternative_times) == 3

    @pytest.mark.asyncio
    async def test_tonight_is_late_day(self, risk_engine):
        schedule = await risk_engine.calculate_optimal_deployment_time(
            "acme/widgets", "production", "tonight"
        )
        assert schedule.suggested_time == datetime(2024, 3, 12, 22, tzinfo=UTC)
        assert schedule.reason == "Late day deployment"
        assert schedule.success_probability == 80
        assert schedule.estimated_rollback_time == 10

    @pytest.mark.asyncio
    async def test_friday_business_hours(self, risk_engine):
        schedule = await risk_engine.calculate_optimal_deployment_time(
            "acme/widgets", "staging", "2024-03-15T10:00:00+00:00"
        )
        assert schedule.traffic_impact == "high"
        assert schedule.reason.startswith("Friday deployment")
        assert schedule.success_probability == 75

    @pytest.mark.asyncio
    async def test_failure_patterns_used(self, mock_analytics, fixed_clock):
        mock_analytics.get_failure_patterns.return_value = [
            {"hour_of_day": 3, "day_of_week": 3, "failure_rate": 40.0}
        ]
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        schedule = await engine.calculate_optimal_deployment_time("acme/widgets", "staging")
        assert schedule.success_probability == 60

    @pytest.mark.asyncio
    async def test_pattern_failure_ignored(self, mock_analytics, fixed_clock):
        mock_analytics.get_failure_patterns.side_effect = ConnectionError("down")
        engine = RiskScoringEngine(analytics=mock_analytics, clock=fixed_clock)
        schedule = await engine.calculate_optimal_deployment_time("acme/widgets", "staging")
        assert schedule.success_probability == 90

    @pytest.mark.asyncio
    async def test_explicit_now(self, risk_engine):
        now = datetime(2024, 3, 12, 1, 0, tzinfo=UTC)
        schedule = await risk_engine.calculate_optimal_deployment_time(
            "acme/widgets", "staging", now=now
        )
        assert schedule.suggested_time == datetime(2024, 3, 12, 3, tzinfo=UTC)


class TestEngineAnomalies:
    @pytest.mark.asyncio
    async def test_without_analytics(self, risk_engine):
        assert await risk_engine.detect_anomalies("acme/widgets") == []

    @pytest.mark.asyncio
    async def test_reads_trends(self, mock_analytics):
        mock_analytics.get_pipeline_trends.return_value = [
            {
                "week": datetime(2024, 3, 11, tzinfo=UTC),
                "avg_duration": 900.0,
                "success_rate": 60.0,
                "prev_week_duration": 300.0,
                "prev_week_success_rate": 95.0,
            }
        ]
        engine = RiskScoringEngine(analytics=mock_analytics)
        anomalies = await engine.detect_anomalies("acme/widgets")
        assert [a.type for a in anomalies] == ["duration", "success_rate"]
        assert all(a.week == "2024-03-11" for a in anomalies)
        mock_analytics.get_pipeline_trends.assert_awaited_once_with("acme/widgets")
