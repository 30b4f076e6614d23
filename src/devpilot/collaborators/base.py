"""Abstract collaborator interfaces consumed by the core.

Concrete CI/CD, warehouse and trained-model clients live outside this
package; anything implementing these methods (or a plain ``AsyncMock``)
can be injected. Methods may return the documented model or a mapping
with the same keys.
"""

from __future__ import annotations

import abc
from typing import Any, Mapping

from devpilot.models.analysis import (
    CostReport,
    FailureAnalysis,
    OptimizationReport,
    TrendInsights,
)
from devpilot.models.cicd import FailedJob, PipelineMetrics, PipelineStatus, TriggerResult
from devpilot.models.prediction import FailurePattern, HistoricalDuration, PipelineTrend


class CICDClient(abc.ABC):
    @abc.abstractmethod
    async def trigger_pipeline(
        self, path: str, ref: str, variables: dict[str, str]
    ) -> TriggerResult:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def get_pipeline_status(self, path: str) -> PipelineStatus:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def get_last_failed_job(self, path: str) -> FailedJob | None:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def get_job(self, path: str, job_id: str) -> FailedJob | None:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def get_pipeline_metrics(self, path: str, time_range: str) -> PipelineMetrics:
        ...  # pragma: no cover


class GenerativeClient(abc.ABC):
    @abc.abstractmethod
    async def generate(self, prompt: str) -> str:
        ...  # pragma: no cover


class AnalyticsClient(abc.ABC):
    @abc.abstractmethod
    async def get_average_duration(
        self, project_id: str, ref: str, days: int
    ) -> HistoricalDuration | None:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def get_failure_patterns(self, project_id: str) -> list[FailurePattern]:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def get_pipeline_trends(self, project_id: str) -> list[PipelineTrend]:
        ...  # pragma: no cover


class PredictionEndpoint(abc.ABC):
    """A trained model returning ``duration`` and ``failure_probability``."""

    @abc.abstractmethod
    async def predict(self, instance: dict[str, float | str]) -> Mapping[str, Any] | None:
        ...  # pragma: no cover


class Advisor(abc.ABC):
    @abc.abstractmethod
    async def analyze_optimizations(self, project_path: str) -> OptimizationReport:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def analyze_pipeline_costs(self, project_path: str) -> CostReport:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def analyze_performance_trends(self, metrics: PipelineMetrics) -> TrendInsights:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def analyze_failure(self, job_log: str, job_config: dict[str, Any]) -> FailureAnalysis:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def optimize_pipeline(
        self, project_path: str, pipeline_id: str, optimization_type: str
    ) -> OptimizationReport:
        ...  # pragma: no cover
