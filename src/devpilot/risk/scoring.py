"""Heuristic deployment risk and cost scoring, optionally model-overridden."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from pydantic import ValidationError

from devpilot.collaborators.base import AnalyticsClient, PredictionEndpoint
from devpilot.models.prediction import (
    Anomaly,
    DeploymentSchedule,
    FailurePattern,
    HistoricalDuration,
    ModelEstimate,
    PipelineTrend,
    Prediction,
    PredictionInput,
)
from devpilot.risk.anomalies import detect_anomalies
from devpilot.risk.policy import RiskContext, RiskDelta, RiskPolicy
from devpilot.risk.scheduling import (
    alternative_windows,
    day_of_week,
    resolve_candidate_time,
    traffic_impact,
)
from devpilot.timeouts import bounded

logger = logging.getLogger(__name__)

HISTORY_DAYS = 30
WELL_SAMPLED_CONFIDENCE = 0.8
SPARSE_CONFIDENCE = 0.5
NO_HISTORY_CONFIDENCE = 0.3
MODEL_CONFIDENCE = 0.9
PRODUCTION_ROLLBACK_MINUTES = 10
DEFAULT_ROLLBACK_MINUTES = 5

_DEFAULT_POLICY = RiskPolicy()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def score_risk(context: RiskContext, policy: RiskPolicy | None = None) -> RiskDelta:
    """Evaluate every rule of ``policy`` against ``context``."""
    return (policy or _DEFAULT_POLICY).evaluate(context)


@dataclass
class _History:
    available: bool = False
    failed: bool = False
    duration: HistoricalDuration | None = None
    patterns: list[FailurePattern] = field(default_factory=list)

    def bucket(self, hour: int, day: int) -> FailurePattern | None:
        for pattern in self.patterns:
            if pattern.hour_of_day == hour and pattern.day_of_week == day:
                return pattern
        return None


class RiskScoringEngine:
    def __init__(
        self,
        analytics: AnalyticsClient | None = None,
        endpoint: PredictionEndpoint | None = None,
        policy: RiskPolicy | None = None,
        timeout: float | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._analytics = analytics
        self._endpoint = endpoint
        self._policy = policy or RiskPolicy()
        self._timeout = timeout
        self._clock = clock

    @property
    def policy(self) -> RiskPolicy:
        return self._policy

    async def score_deployment(self, prediction_input: PredictionInput) -> Prediction:
        now = self._clock()
        hour = (
            prediction_input.hour_of_day
            if prediction_input.hour_of_day is not None
            else now.hour
        )
        day = (
            prediction_input.day_of_week
            if prediction_input.day_of_week is not None
            else day_of_week(now)
        )

        history = await self._load_history(prediction_input.project_path, prediction_input.ref)
        historical_duration = history.duration.avg_duration if history.duration else None
        bucket = history.bucket(hour, day)

        duration = historical_duration or self._policy.default_duration
        if bucket and bucket.failure_rate:
            probability = bucket.failure_rate / 100
        else:
            probability = self._policy.default_failure_probability
        confidence = self._history_confidence(history)

        delta = score_risk(
            RiskContext(
                commit_files_count=prediction_input.commit_files_count,
                hour_of_day=hour,
                day_of_week=day,
            ),
            self._policy,
        )
        duration *= delta.duration_factor
        probability += delta.probability_delta
        risk_factors = list(delta.risk_factors)
        recommendations = list(delta.recommendations)
        if history.failed:
            risk_factors.append("Unable to analyze historical data")
            recommendations.append("Proceed with standard precautions")

        if self._endpoint is not None:
            override = await self._model_override(
                prediction_input,
                hour,
                day,
                historical_duration or 0,
                bucket.failure_rate if bucket else 0,
            )
            if override is not None:
                duration = override.duration or duration
                probability = override.failure_probability or probability
                confidence = MODEL_CONFIDENCE

        probability = self._policy.clamp(probability)
        cost = self._policy.estimate_cost(duration)

        return Prediction(
            estimated_duration=round(duration),
            failure_probability=round(probability, 2),
            estimated_cost=round(cost, 2),
            confidence=round(confidence, 2),
            risk_factors=risk_factors,
            recommendations=recommendations,
        )

    async def calculate_optimal_deployment_time(
        self,
        project_path: str,
        environment: str,
        preferred_time: str | None = None,
        now: datetime | None = None,
    ) -> DeploymentSchedule:
        now = now or self._clock()
        candidate = resolve_candidate_time(preferred_time, now)
        hour, day = candidate.hour, day_of_week(candidate)

        patterns = await self._failure_patterns(project_path)
        bucket = _History(patterns=patterns).bucket(hour, day)
        base = (
            bucket.failure_rate / 100
            if bucket and bucket.failure_rate
            else self._policy.default_failure_probability
        )
        delta = score_risk(RiskContext(hour_of_day=hour, day_of_week=day), self._policy)
        probability = self._policy.clamp(base + delta.probability_delta)
        impact = traffic_impact(candidate)

        if delta.risk_factors:
            reason = "; ".join(delta.risk_factors)
        elif impact == "low":
            reason = "Low traffic period with high success rate"
        else:
            reason = "No elevated risk factors at this time"

        return DeploymentSchedule(
            suggested_time=candidate,
            reason=reason,
            traffic_impact=impact,
            success_probability=round((1 - probability) * 100),
            estimated_rollback_time=(
                PRODUCTION_ROLLBACK_MINUTES
                if environment.lower() == "production"
                else DEFAULT_ROLLBACK_MINUTES
            ),
            alternative_times=alternative_windows(candidate),
        )

    async def detect_anomalies(self, project_id: str) -> list[Anomaly]:
        if self._analytics is None:
            return []
        rows = await bounded(
            self._analytics.get_pipeline_trends(project_id),
            self._timeout,
            collaborator="analytics",
        )
        return detect_anomalies([PipelineTrend.model_validate(row) for row in rows or []])

    def _history_confidence(self, history: _History) -> float:
        if not history.available:
            return NO_HISTORY_CONFIDENCE
        sample_size = history.duration.sample_size if history.duration else 0
        if sample_size >= self._policy.well_sampled_size:
            return WELL_SAMPLED_CONFIDENCE
        return SPARSE_CONFIDENCE

    async def _load_history(self, project_id: str, ref: str) -> _History:
        if self._analytics is None:
            return _History()
        try:
            raw_duration = await bounded(
                self._analytics.get_average_duration(project_id, ref, HISTORY_DAYS),
                self._timeout,
                collaborator="analytics",
            )
            raw_patterns = await bounded(
                self._analytics.get_failure_patterns(project_id),
                self._timeout,
                collaborator="analytics",
            )
            duration = (
                HistoricalDuration.model_validate(raw_duration)
                if raw_duration is not None
                else None
            )
            patterns = [FailurePattern.model_validate(p) for p in raw_patterns or []]
        except Exception as exc:
            logger.warning("Historical data unavailable for %s: %s", project_id, exc)
            return _History(failed=True)

        has_duration = duration is not None and duration.avg_duration is not None
        return _History(
            available=has_duration or bool(patterns),
            duration=duration,
            patterns=patterns,
        )

    async def _failure_patterns(self, project_id: str) -> list[FailurePattern]:
        if self._analytics is None:
            return []
        try:
            rows = await bounded(
                self._analytics.get_failure_patterns(project_id),
                self._timeout,
                collaborator="analytics",
            )
            return [FailurePattern.model_validate(row) for row in rows or []]
        except Exception as exc:
            logger.warning("Failure patterns unavailable for %s: %s", project_id, exc)
            return []

    async def _model_override(
        self,
        prediction_input: PredictionInput,
        hour: int,
        day: int,
        historical_duration: float,
        historical_failure_rate: float,
    ) -> ModelEstimate | None:
        instance = {
            "project_id": prediction_input.project_path,
            "ref": prediction_input.ref,
            "commit_files_count": prediction_input.commit_files_count,
            "hour_of_day": hour,
            "day_of_week": day,
            "historical_avg_duration": historical_duration,
            "historical_failure_rate": historical_failure_rate,
        }
        try:
            result = await bounded(
                self._endpoint.predict(instance),  # type: ignore[union-attr]
                self._timeout,
                collaborator="prediction_endpoint",
            )
        except Exception as exc:
            logger.warning("Prediction endpoint failed, keeping heuristic: %s", exc)
            return None
        if not result:
            return None
        try:
            return ModelEstimate.model_validate(result)
        except (ValidationError, TypeError, ValueError) as exc:
            logger.warning("Prediction endpoint reply rejected, keeping heuristic: %s", exc)
            return None
