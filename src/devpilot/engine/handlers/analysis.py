"""Advisor-backed handlers: optimization, cost and performance reports."""

from __future__ import annotations

from devpilot.collaborators.base import Advisor, CICDClient
from devpilot.engine.handlers.base import DispatchRequest, IntentHandler
from devpilot.models.analysis import CostReport, OptimizationReport, TrendInsights
from devpilot.models.cicd import PipelineMetrics
from devpilot.models.response import (
    CostAnalysisReport,
    OptimizationSuggested,
    OutcomeBase,
    PerformanceReport,
)

DEFAULT_TIME_RANGE = "last_7_days"


class OptimizationHandler(IntentHandler):
    failure_prefix = "Failed to analyze optimizations"

    def __init__(self, advisor: Advisor | None, timeout: float | None = None) -> None:
        super().__init__(timeout)
        self._advisor = advisor

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        if self._advisor is None:
            return self._no_advisor()
        raw = await self._call(
            self._advisor.analyze_optimizations(request.project()), collaborator="advisor"
        )
        return OptimizationSuggested(report=OptimizationReport.model_validate(raw))


class CostHandler(IntentHandler):
    failure_prefix = "Cost analysis failed"

    def __init__(self, advisor: Advisor | None, timeout: float | None = None) -> None:
        super().__init__(timeout)
        self._advisor = advisor

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        if self._advisor is None:
            return self._no_advisor()
        project = request.project()
        raw = await self._call(
            self._advisor.analyze_pipeline_costs(project), collaborator="advisor"
        )
        return CostAnalysisReport(project=project, report=CostReport.model_validate(raw))


class PerformanceHandler(IntentHandler):
    failure_prefix = "Performance report failed"

    def __init__(
        self, cicd: CICDClient, advisor: Advisor | None, timeout: float | None = None
    ) -> None:
        super().__init__(timeout)
        self._cicd = cicd
        self._advisor = advisor

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        if self._advisor is None:
            return self._no_advisor()
        time_range = request.entities.time_range or DEFAULT_TIME_RANGE
        raw_metrics = await self._call(
            self._cicd.get_pipeline_metrics(request.project(), time_range),
            collaborator="cicd",
        )
        metrics = PipelineMetrics.model_validate(raw_metrics)
        raw_insights = await self._call(
            self._advisor.analyze_performance_trends(metrics), collaborator="advisor"
        )
        return PerformanceReport(
            time_range=time_range,
            metrics=metrics,
            insights=TrendInsights.model_validate(raw_insights),
        )
